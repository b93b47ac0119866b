"""
State machine and controller runtime module.

Manages the inline edit lifecycle state machine:
VIEW → EDIT → PENDING → SAVED / ERROR → VIEW, with DISABLED as an overriding state.
"""
