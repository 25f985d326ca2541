"""
Service layer.

``product_store`` owns the in‑memory records, ``query_engine`` derives
read‑only views from them and ``validator`` checks write payloads
before they reach the store.
"""
