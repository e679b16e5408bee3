"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2), el
  alfabeto y la jerarquía de errores.
- El dominio no conoce HTTP, CLI, ni disco: solo conceptos del problema.
"""
