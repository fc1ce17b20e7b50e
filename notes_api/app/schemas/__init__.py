"""
Pydantic schema definitions.

Stored records (``Account``, ``Note``) double as API response bodies
where that does not leak anything; request payloads have their own
models so validation of user input stays out of the stored format.
"""
