from .metrics import objective, gap
