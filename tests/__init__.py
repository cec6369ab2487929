"""
Parex Test Suite
================

Test Organization
-----------------
- tests/unit/          : Fast unit tests, one module per component
- tests/integration/   : Multi-threaded stress tests of the category registry

Testing Philosophy
------------------
- Every test builds its own CategoryRegistry
- Use pytest markers (unit, integration, slow) to select tests
- Follow AAA pattern: Arrange, Act, Assert
"""
