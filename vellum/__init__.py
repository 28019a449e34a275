"""
Vellum - resume records rendered to paginated, styled PDF

Turns a structured resume record into a PDF byte stream with dynamic layout,
font-capability detection and script-fallback transliteration.

Architecture:
- Templating Context: Resume document model, style tokens, named templates
- Rendering Context: Graphics backend, fonts, transliteration, pagination,
  section renderers and PDF assembly
"""

__version__ = "0.1.0"
