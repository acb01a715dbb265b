"""Domain core: exceptions, security primitives and access rules."""
