"""
Template-driven report card rendering.

Paints JSON-described result templates (shapes, text, images, dynamic
fields and tables) with a student's academic record onto a PDF page.
"""
