"""Application composition layer.

Controllers in this package wire view models, adapters, and use cases into
runnable workflows without placing business logic in views.
"""
