# cartstore/api/__init__.py
