"""Service Layer — lifecycle hook procedures, their bindings, and the content host."""
