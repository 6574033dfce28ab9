# -*- coding: utf-8 -*-
"""
schema

Pydantic descriptors for breads, layouts and formfields.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .descriptors import Bread, FormfieldConfig, Layout, RuleDescriptor

__all__ = ["Bread", "FormfieldConfig", "Layout", "RuleDescriptor"]

# The End
