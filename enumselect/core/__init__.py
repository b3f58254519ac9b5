"""Core models, configuration, runtime algebra and derive decorators."""
