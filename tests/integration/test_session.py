from pathlib import Path

import pytest

from flowgraph.errors import ErrorKind, UnknownIdError
from flowgraph.issues import W_CHANNEL_NOT_FOUND, IssueConfig
from flowgraph.session import FlowGraphSession

FLOWS = Path(__file__).resolve().parents[1] / "fixtures" / "flows"

pytestmark = pytest.mark.integration


@pytest.fixture
def texts() -> list[str]:
    return [
        (FLOWS / "orders.xml").read_text(encoding="utf-8"),
        (FLOWS / "billing.xml").read_text(encoding="utf-8"),
    ]


def test_first_process_offers_methods(texts):
    session = FlowGraphSession()
    result = session.process(texts)

    assert result.ok
    assert result.graph is None
    assert [m.name for m in result.method_choices] == ["placeOrder", "cancelOrder", "reprice"]
    assert session.registry is not None


def test_unchanged_method_list_renders_selection(texts):
    session = FlowGraphSession()
    first = session.process(texts)
    available = [m.id for m in first.method_choices]

    result = session.process(texts, selected_ids=["M0"], available_ids=available)
    assert result.ok
    assert result.graph.startswith("graph TD\n")
    assert result.method_choices == ()
    assert result.warnings == [
        "There is no node with billing.done as input channel.",
        "There is no node with billing.errors as input channel.",
    ]


def test_changed_method_list_offers_methods_again(texts):
    session = FlowGraphSession()
    result = session.process(texts[:1], selected_ids=["M0"], available_ids=["M0", "M1", "M2"])
    assert result.ok
    assert result.graph is None
    assert [m.id for m in result.method_choices] == ["M0", "M1"]


def test_empty_selection_is_fatal(texts):
    session = FlowGraphSession()
    result = session.process(texts, selected_ids=[], available_ids=["M0", "M1", "M2"])
    assert not result.ok
    assert result.error.kind is ErrorKind.NO_METHOD_SELECTED
    assert session.registry is None


def test_fatal_error_discards_previous_state(texts):
    session = FlowGraphSession()
    session.process(texts, selected_ids=["M0"], available_ids=["M0", "M1", "M2"])
    assert session.graph is not None

    result = session.process(["<beans><int:filter xmlns:int='urn:x'/></beans>"])
    assert not result.ok
    assert result.error.kind is ErrorKind.UNKNOWN_ELEMENT
    assert session.registry is None
    assert session.graph is None
    assert session.last_error is result.error


def test_blank_documents_are_skipped():
    session = FlowGraphSession()
    result = session.process(["", "   \n"])
    assert not result.ok
    assert result.error.kind is ErrorKind.NO_INPUT
    assert str(result.error) == "No XML provided!"


def test_warnings_reported_as_they_happen(texts):
    seen = []
    session = FlowGraphSession(on_issue=seen.append)
    result = session.render(["M0"])
    assert not result.ok

    session.process(texts)
    result = session.render(["M0"])
    assert result.ok
    assert [iss.code for iss in seen] == [W_CHANNEL_NOT_FOUND, W_CHANNEL_NOT_FOUND]


def test_ignored_codes(texts):
    session = FlowGraphSession(issue_config=IssueConfig(ignore=frozenset({W_CHANNEL_NOT_FOUND})))
    session.process(texts)
    assert session.render(["M0"]).issues == ()


def test_escalated_codes_are_reported_as_errors(texts):
    session = FlowGraphSession(
        issue_config=IssueConfig(escalate=frozenset({W_CHANNEL_NOT_FOUND}))
    )
    first = session.process(texts)
    result = session.process(
        texts, selected_ids=["M0"], available_ids=[m.id for m in first.method_choices]
    )

    assert result.ok
    assert result.warnings == []
    assert result.errors == [
        "There is no node with billing.done as input channel.",
        "There is no node with billing.errors as input channel.",
    ]


def test_detail_lookups(texts):
    session = FlowGraphSession()
    session.process(texts)

    method = session.method_details("M0")
    assert method.title == "Method placeOrder"
    assert method.source == '<int:method name="placeOrder" request-channel="orders.in"/>'

    node = session.node_details("N1")
    assert node.title == "Node orders.route (router)"
    assert node.source.startswith('<int:router input-channel="orders.route"')

    with pytest.raises(UnknownIdError):
        session.node_details("NF0")


def test_every_click_target_resolves(texts):
    session = FlowGraphSession()
    session.process(texts)
    result = session.render(list(session.registry.method_ids))

    for line in result.graph.splitlines():
        if not line.startswith("click "):
            continue
        _, node_id, handler = line.rstrip(";").split(" ")
        if handler == "onGraphMethodClick":
            assert session.method_details(node_id).id == node_id
        else:
            assert handler == "onGraphNodeClick"
            assert session.node_details(node_id).id == node_id


def test_failed_click_discards_state(texts):
    session = FlowGraphSession()
    session.process(texts)
    assert session.handle_click(session.method_details, "M0").title == "Method placeOrder"
    assert session.handle_click(session.method_details, "M42") is None
    assert session.registry is None
    assert session.last_error.kind is ErrorKind.UNKNOWN_ID
