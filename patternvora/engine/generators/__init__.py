"""Style generators. Each module registers itself with ``@generator``."""
