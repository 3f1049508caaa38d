import pytest

from plogic.interpreter import NESTING_MESSAGE, Interpreter, process, render
from plogic.results import BindingAck, Diagnostic, RewriteResult, TableResult
from plogic.session import DisplayMode, Session
from plogic.types.expr import BinOperator, Binary, Primary


def test_bare_formula_yields_table(session):
    result = process("p & q", session)
    assert isinstance(result, TableResult)
    assert result.text == "p & q"
    assert result.table.result.tolist() == [0, 0, 0, 1]
    assert result.notes == []
    assert session.previous == "p & q"


def test_keyword_formula_is_remembered_in_symbolic_form(session):
    process("p and not q", session)
    assert session.previous == "p & ~q"


def test_inline_rewrite(session):
    result = process("f & t => p & q = q & p", session)
    assert isinstance(result, RewriteResult)
    assert result.text == "t & f"
    assert session.previous == "t & f"


def test_bound_rule_reuse(session):
    ack = process("commutative := p & q = q & p", session)
    assert isinstance(ack, BindingAck)
    assert ack.name == "commutative"
    assert ack.text == "commutative := p & q = q & p"
    assert "commutative" in session.rules

    result = process("x & y => commutative", session)
    assert isinstance(result, RewriteResult)
    assert result.text == "y & x"


def test_binding_does_not_change_previous(session):
    process("p | q", session)
    process("comm := p & q = q & p", session)
    assert session.previous == "p | q"


def test_rebinding_replaces_rule(session):
    process("r := p & q = q & p", session)
    process("r := p & q = p", session)
    assert process("a & b => r", session).text == "a"


def test_bound_rule_applies_to_other_atom_names(session):
    process("swap := p | q = q | p", session)
    assert process("a & b | c => swap", session).text == "c | a & b"


def test_undefined_rule(session):
    result = process("a => nope", session)
    assert isinstance(result, Diagnostic)
    assert result.kind == "rewrite"
    assert result.message == "Undefined rule used: nope"


def test_rewrite_failure_reports_mismatch_and_unbound_atom(session):
    process("p", session)
    result = process("f & t => p -> q = ~p | q", session)
    assert isinstance(result, Diagnostic)
    assert result.kind == "rewrite"
    assert result.message == "Pattern could not be found in expression or left hand side"
    assert result.notes == [
        "Expression does not match pattern (expected '->', found '&'): f & t"
    ]
    # failures leave `ans` alone
    assert session.previous == "p"


def test_permissive_rewrite_keeps_mismatch_notes(session):
    result = process("a & c => (p) & q = q", session)
    assert isinstance(result, RewriteResult)
    assert result.text == "c"
    assert len(result.notes) == 1


def test_strict_session_rejects_mismatches():
    session = Session(strict=True)
    result = process("a & b => p & p = p", session)
    assert isinstance(result, Diagnostic)
    assert result.message == "Expression does not match pattern"
    assert result.notes == ["Expression does not match pattern (inconsistent binding): b"]


def test_syntax_error(session):
    process("p", session)
    result = process("p & (q", session)
    assert isinstance(result, Diagnostic)
    assert result.kind == "syntax"
    assert result.message == "Missing closing parenthesis"
    assert session.previous == "p"


def test_binding_non_atom_is_syntax_error(session):
    result = process("p & q := a = b", session)
    assert isinstance(result, Diagnostic)
    assert result.message.startswith("Can only bind rule to identifier")


def test_lexical_diagnostics_become_notes(session):
    result = process("p & $q", session)
    assert isinstance(result, TableResult)
    assert result.text == "p & q"
    assert len(result.notes) == 1
    assert "Unexpected character: '$'" in result.notes[0]


def test_lexical_diagnostics_travel_with_syntax_errors(session):
    result = process("p ? q", session)
    assert isinstance(result, Diagnostic)
    assert result.kind == "syntax"
    assert len(result.notes) == 1


def test_ans_reevaluates_previous_formula(session):
    first = process("(p -> q) & r", session)
    again = process("ans", session)
    assert isinstance(again, TableResult)
    assert again.text == first.text
    assert {e: b.tolist() for e, b in again.table.column_map().items()} == \
        {e: b.tolist() for e, b in first.table.column_map().items()}


def test_ans_after_rewrite_uses_rewritten_text(session):
    process("f & t => p & q = q & p", session)
    result = process("ans", session)
    assert isinstance(result, TableResult)
    assert result.text == "t & f"


def test_ans_splices_tokens(session):
    process("p | q", session)
    result = process("ans & r", session)
    # the previous text is spliced in as tokens, without parentheses
    assert result.text == "p | q & r"
    assert result.table.expr == Binary(
        Primary(0), BinOperator.OR, Binary(Primary(1), BinOperator.AND, Primary(2))
    )


def test_ans_can_be_rewritten(session):
    process("a -> b", session)
    assert process("ans => p -> q = ~p | q", session).text == "~a | b"


def test_ans_without_previous_is_an_atom(session):
    result = process("ans", session)
    assert isinstance(result, TableResult)
    assert result.text == "ans"


def test_render(session):
    assert render(process("a & b => p & q = q & p", session), session) == "b & a"
    assert render(process("c := p = p", session), session) == "bound c := p = p"
    assert render(process("p q", session), session) == \
        "Unexpected token, expected end of input: identifier 'q'"
    table_text = render(process("p", session), session)
    assert table_text.splitlines()[1] == "[ p ] "


def test_render_respects_display_mode(session):
    result = process("p", session)
    session.display = DisplayMode.BOOL
    assert "| T | " in render(result, session)
    session.display = DisplayMode.BITS
    assert "| 1 | " in render(result, session)


def test_render_puts_notes_first(session):
    text = render(process("p & $q", session), session)
    assert text.splitlines()[0].startswith("Unexpected character")


def test_interpreter_keeps_session_between_lines():
    interp = Interpreter(Session())
    interp.eval("comm := p & q = q & p")
    assert interp.eval_text("a & b => comm") == "b & a"
    assert interp.eval_text("ans => comm") == "a & b"


def test_interpreter_reads_environment(monkeypatch):
    monkeypatch.setenv("PLOGIC_STRICT_MATCH", "1")
    monkeypatch.setenv("PLOGIC_DISPLAY", "bool")
    interp = Interpreter()
    assert interp.session.strict is True
    assert interp.session.display is DisplayMode.BOOL


@pytest.mark.parametrize("line", ["p", "p & q", "~p -> q", "(p | q) <-> ~r"])
def test_ans_matches_reentering_input(line):
    direct = process(line, Session())
    session = Session()
    process(line, session)
    via_ans = process("ans", session)
    assert via_ans.text == direct.text
    assert via_ans.table.result.tolist() == direct.table.result.tolist()


def test_rewrite_parenthesises_substituted_operands(session):
    result = process("a | b => p = ~p", session)
    assert result.text == "~(a | b)"
    again = process("ans", session)
    assert again.table.result.tolist() == [1, 0, 0, 0]


def test_rewrite_under_tighter_operator_keeps_meaning(session):
    assert process("a | b => p = p & p", session).text == "(a | b) & (a | b)"
    assert process("ans", session).table.result.tolist() == [0, 1, 1, 1]


@pytest.mark.parametrize(
    "line",
    [
        "(" * 1000 + "p" + ")" * 1000,
        " & ".join(["p"] * 5000),
        "~" * 5000 + "p",
    ]
)
def test_deeply_nested_formula_is_a_diagnostic(session, line):
    process("q", session)
    result = process(line, session)
    assert isinstance(result, Diagnostic)
    assert result.kind == "syntax"
    assert result.message == NESTING_MESSAGE
    assert session.previous == "q"
    # the session stays usable
    assert process("p & q", session).table.result.tolist() == [0, 0, 0, 1]
