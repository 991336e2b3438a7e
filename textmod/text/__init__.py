"""Text primitives shared by the dictionary engine and the scorer."""
