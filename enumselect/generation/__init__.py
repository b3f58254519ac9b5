"""Code generation for enumselect: installers and whole modules."""

from enumselect.generation.display_generator import generate_display
from enumselect.generation.generated_code import GeneratedCode
from enumselect.generation.index_generator import generate_index

__all__ = [
    'GeneratedCode',
    'generate_display',
    'generate_index',
]
