"""Host adapters for driving the delimiter commands from a UI."""
