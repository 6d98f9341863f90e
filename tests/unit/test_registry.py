from flowgraph.issues import IssueLog
from flowgraph.parser import parse_documents

XML = """<beans xmlns:int="urn:int">
  <int:gateway>
    <int:method name="a" request-channel="a.in"/>
    <int:method name="b" request-channel="b.in"/>
  </int:gateway>
  <int:transformer input-channel="a.in"/>
</beans>"""


def test_lookups_for_unknown_keys_return_none():
    registry = parse_documents([XML], IssueLog())
    assert registry.method_by_id("M9") is None
    assert registry.method_by_name("missing") is None
    assert registry.node_by_id("N9") is None
    assert registry.node_by_input_channel("nowhere") is None


def test_has_method_ids_requires_same_order():
    registry = parse_documents([XML], IssueLog())
    assert registry.has_method_ids(["M0", "M1"])
    assert not registry.has_method_ids(["M1", "M0"])
    assert not registry.has_method_ids(["M0"])
    assert not registry.has_method_ids([])


def test_iteration_is_in_id_order():
    registry = parse_documents([XML], IssueLog())
    assert [m.name for m in registry.methods()] == ["a", "b"]
    assert [n.id for n in registry.nodes()] == ["N0"]


def test_fresh_registry_restarts_ids():
    first = parse_documents([XML], IssueLog())
    second = parse_documents([XML], IssueLog())
    assert first.method_ids == second.method_ids == ("M0", "M1")
    assert first is not second


def test_detail_titles():
    registry = parse_documents([XML], IssueLog())
    assert registry.method_by_id("M0").title == "Method a"
    assert registry.node_by_id("N0").title == "Node a.in (transformer)"
