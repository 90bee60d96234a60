# -*- coding: utf-8 -*-
"""Generation agents."""
