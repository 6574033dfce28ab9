# -*- coding: utf-8 -*-
"""
core

Controller base, query composition and record transformation for breads.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# The End
