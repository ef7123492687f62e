"""
Service layer abstraction.

Services encapsulate store access for a domain so that API handlers
never issue SQL themselves.
"""
