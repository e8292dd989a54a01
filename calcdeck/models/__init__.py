"""ORM Models — SQLAlchemy declarative models for categories and guide content.

Invariants:
    - All models inherit from Base (db/base.py)
    - Calculator definitions are not stored here; they live in YAML files

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from calcdeck.models.calculator_category import CalculatorCategory  # noqa: F401
from calcdeck.models.calculator_subcategory import CalculatorSubcategory  # noqa: F401
from calcdeck.models.blog_category import BlogCategory  # noqa: F401
from calcdeck.models.post import Post  # noqa: F401
