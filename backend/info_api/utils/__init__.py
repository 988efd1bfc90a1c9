# Utils package init
"""
Info API — HTTP Helpers
========================

    - header_util.py:  entity alert / failure alert headers
    - pagination.py:   paging query dependency, X-Total-Count and Link headers
"""
