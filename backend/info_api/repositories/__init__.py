# Repositories package init
"""
Info API — Repository Layer
============================

What:  Persistence access behind a small, mockable capability set.

Repository Inventory:
    - base.py:              AsyncRepository (save, find_by_id, exists_by_id,
                            find_all, delete_by_id) and Page
    - thema_repository.py:  ThemaRepository bound to the Thema model
"""
