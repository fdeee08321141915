"""
Test suite for statecell.

Focus areas:
- Interceptor onion order
- Re-entrancy guard and notification order
- DeferredEffect laziness and chain laws
- Replay matching dispatch
"""
