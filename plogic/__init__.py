# Core type aliases for plogic's data model.
# Expressions are small frozen dataclasses (see plogic.types.expr); tokens are
# plain (kind, text) tuples as produced by the lexer; truth-table columns are
# numpy uint8 arrays holding one 0/1 entry per assignment row.

from typing import Tuple

import numpy as np

# (kind, text) pair emitted by plogic.reader.lexer.lex
Token = Tuple[str, str]

# One truth-table column
Bits = np.ndarray

__version__ = "0.1.0"
