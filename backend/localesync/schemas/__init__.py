"""Request/response schemas — pydantic models at the HTTP boundary."""
