from __future__ import annotations


class PlogicError(Exception):
    """ Base class for all plogic errors"""
    pass

class PlogicSyntaxError(PlogicError):
    """ Raised when a statement cannot be parsed"""

class PlogicRewriteError(PlogicError):
    """ Raised when a rule cannot be applied to an expression"""

    def __init__(self, message: str, mismatches: list | None = None):
        super().__init__(message)
        self.mismatches = list(mismatches or [])

class PlogicUndefinedRuleError(PlogicRewriteError):
    """ Raised when a rule name is used before it is bound"""

class PlogicUnboundPatternError(PlogicRewriteError):
    """ Raised when the right hand side of a rule uses an atom the match never bound"""

class PlogicPatternMismatchError(PlogicRewriteError):
    """ Raised in strict matching mode when the expression does not have the rule's shape"""

class PlogicEvaluationError(PlogicError):
    """ Raised when a rule application or binding reaches the truth-table evaluator"""
