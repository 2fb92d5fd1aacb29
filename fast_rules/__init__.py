"""
fast-rules - Laravel validation rules compiled from typed API schemas

This package walks the type graph of an API operation's parameters and body
and produces, for every field, the ordered Laravel validation rules that
enforce it:
- Constraint synthesis from scalar types, annotations and optionality
- Field paths for nested objects and arrays (`items.*.name`)
- JSON schema documents as input
- FormRequest classes as output
"""

__version__ = "0.1.0"
__author__ = "Patrik Mojzis"
__email__ = "patrikm53@gmail.com"
__license__ = "MIT"
__url__ = "https://github.com/patrikmojzis/fast-rules"

from .contracts import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .exceptions import *  # noqa: F401,F403
