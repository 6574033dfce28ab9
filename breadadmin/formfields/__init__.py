# -*- coding: utf-8 -*-
"""
__init__

Formfield plugins converting columns for BREAD views.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from .base import BaseFormfield
from .registry import registry, register_formfield

__all__ = ["BaseFormfield", "registry", "register_formfield"]

# Import built-in formfields so they register themselves:
from .text import TextFormfield  # noqa: F401,E402
from .number import NumberFormfield  # noqa: F401,E402
from .checkbox import CheckboxFormfield  # noqa: F401,E402
from .select import SelectFormfield  # noqa: F401,E402
from .password import PasswordFormfield  # noqa: F401,E402
from .relationship import RelationshipFormfield  # noqa: F401,E402
from .date import DateFormfield  # noqa: F401,E402

# The End
