# -*- coding: utf-8 -*-
"""
tests

Test-suite package for breadadmin.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# The End
