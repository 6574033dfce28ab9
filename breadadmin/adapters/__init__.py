# -*- coding: utf-8 -*-
"""
adapters

ORM adapters used by the BREAD controllers.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .tortoise import Adapter, RawContains

BaseAdapter = Adapter

__all__ = ["Adapter", "BaseAdapter", "RawContains"]

# The End
