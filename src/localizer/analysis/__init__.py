"""Template analysis: argument-count inference.

Python 3.13+. Uses Babel for i18n.
"""

from .arguments import ArgCountStrategy, count_args, count_args_parsed, infer_arity

__all__ = ["ArgCountStrategy", "count_args", "count_args_parsed", "infer_arity"]
