# -*- coding: utf-8 -*-
"""
utils

Helper utilities for breadadmin.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# The End
