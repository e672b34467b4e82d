# src/saleor_configurator/diff/__init__.py
"""
Reconciliação entre estado desejado e estado remoto.

    - types       → DiffOperation, EntityType, DiffChange, DiffResult, DiffSummary
    - comparators → um comparador por tipo de entidade
    - service     → `DiffService.compare(configuration)`
    - formatter   → renderização textual do diff
"""
