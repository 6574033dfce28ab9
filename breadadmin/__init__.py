# -*- coding: utf-8 -*-
"""
__init__

BREAD admin entry point.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .conf import BreadSettings, configure, current_settings
from .core.bread_controller import BreadController
from .core.breads import BreadManager
from .core.context import BreadContext
from .core.controller import Controller
from .router import BreadRouter

__version__ = "0.1.0"

# The End
