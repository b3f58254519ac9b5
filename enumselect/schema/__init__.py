"""YAML schema front end."""

from enumselect.schema.loader import Schema, load_schema, load_schema_text

__all__ = ['Schema', 'load_schema', 'load_schema_text']
