# -*- coding: utf-8 -*-
"""
Content package — turns a story's content tree into plain text.
Schema index, typed content nodes, tree walker, rich text conversion and
dot-notation field access.
"""
