"""
Service layer.

``AccountService`` owns the account list and the session pointer,
``NoteService`` owns one note collection per username, and
``query_service`` filters and sorts an already loaded collection.
Services receive their store explicitly so they can be driven by the
API, by tests or by any other caller.
"""
