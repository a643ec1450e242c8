"""
The MODEL layer contains the immutable geometry value types, the minimal
analytic kernel (curves, surfaces, topology) and the entity classification.
It has NO knowledge of how distances are resolved.
"""
