"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos
  (repositorios de artefactos, motor de transformación).
- Permite invertir dependencias: el Core depende de abstracciones.
"""
