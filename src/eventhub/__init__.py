"""
EventHub core: transactional state machines of the event-ticketing domain.
"""
