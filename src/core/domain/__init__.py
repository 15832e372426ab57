"""Modelos y entidades de dominio.

Por qué:
- Estructuras de datos simples y estrictas (Pydantic v2) y la taxonomía de fallos.
- El dominio no conoce HTTP, CLI ni SDKs: solo conceptos de tienda y réplica.
"""
