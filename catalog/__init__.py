"""catalog/ -- Product catalog: domain model, store and service.

Layer rule: catalog/ imports stdlib, third-party libraries and core/ only.
"""
