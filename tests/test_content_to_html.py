import pytest

from telegraphkit.content_to_html import content_tree_to_html
from telegraphkit.exceptions import InvalidContentError
from telegraphkit.html_to_content import html_to_content_tree
from telegraphkit.policy import DELETE, ContentPolicy
from telegraphkit.types_content import NodeElement


def test_renders_nodes_without_wrapper() -> None:
    content = [
        NodeElement(tag="h3", children=["Title"]),
        NodeElement(tag="p", children=["First paragraph"]),
        NodeElement(
            tag="p",
            children=[
                "Link: ",
                NodeElement(tag="a", attrs={"href": "https://www.google.com/"}, children=["Google"]),
            ],
        ),
    ]

    html = content_tree_to_html(content)

    assert html == (
        "<h3>Title</h3>"
        "<p>First paragraph</p>"
        '<p>Link: <a href="https://www.google.com/">Google</a></p>'
    )


def test_rules_apply_in_both_directions() -> None:
    policy = ContentPolicy()
    policy.set_tag_rules({"h1": "h3", "div": "p", "span": "b", "footer": DELETE})
    source = (
        "<h1>Title</h1>"
        "<div>First paragraph</div>"
        "<div>Second <span>paragraph</span></div>"
        "<footer>Copyright</footer>"
    )

    content = html_to_content_tree(source, policy)
    html = content_tree_to_html(content, policy)

    assert html == "<h3>Title</h3><p>First paragraph</p><p>Second <b>paragraph</b></p>"


def test_rename_rule_applied_on_output() -> None:
    policy = ContentPolicy()
    policy.set_tag_rule("b", "strong")
    content = [NodeElement(tag="p", children=["Second ", NodeElement(tag="b", children=["bold"])])]

    assert content_tree_to_html(content, policy) == "<p>Second <strong>bold</strong></p>"


def test_delete_rule_drops_subtree_on_output() -> None:
    policy = ContentPolicy()
    policy.set_tag_rule("aside", DELETE)
    content = [
        NodeElement(tag="aside", children=[NodeElement(tag="p", children=["hidden"])]),
        NodeElement(tag="p", children=["shown"]),
    ]

    assert content_tree_to_html(content, policy) == "<p>shown</p>"


def test_attributes_filtered_and_ordered() -> None:
    policy = ContentPolicy()
    policy.set_disallowed_attributes(["title"])
    content = [NodeElement(tag="img", attrs={"src": "/a.png", "title": "t", "alt": "A"})]

    assert content_tree_to_html(content, policy) == '<img src="/a.png" alt="A">'


def test_text_uses_minimal_escaping() -> None:
    content = [
        "a < b & c > d",
        NodeElement(tag="p", children=["Ünïcode — “quoted” it's"]),
        NodeElement(tag="a", attrs={"href": '/q?x=1&y="2"', "title": "it's"}, children=["q"]),
    ]

    assert content_tree_to_html(content) == (
        "a &lt; b &amp; c &gt; d"
        "<p>Ünïcode — “quoted” it's</p>"
        '<a href="/q?x=1&amp;y=&quot;2&quot;" title="it&#x27;s">q</a>'
    )


def test_void_elements() -> None:
    content = [NodeElement(tag="p", children=["a", NodeElement(tag="br"), "b"]), NodeElement(tag="hr")]

    assert content_tree_to_html(content) == "<p>a<br>b</p><hr>"


@pytest.mark.parametrize("source", [42, None, {"tag": "p", "children": ["x"]}])
def test_invalid_node_rejected(source) -> None:
    with pytest.raises(InvalidContentError):
        content_tree_to_html([source])


def test_invalid_nested_child_rejected() -> None:
    element = NodeElement.model_construct(tag="p", attrs=None, children=["ok", 1])

    with pytest.raises(InvalidContentError):
        content_tree_to_html([element])


@pytest.mark.parametrize("tag", ["bad tag", "<p>", "", "1p"])
def test_invalid_tag_rejected(tag) -> None:
    with pytest.raises(InvalidContentError):
        content_tree_to_html([NodeElement(tag=tag)])


def test_invalid_attribute_name_rejected() -> None:
    with pytest.raises(InvalidContentError):
        content_tree_to_html([NodeElement(tag="a", attrs={"on click": "x"})])


def test_rule_to_invalid_tag_rejected() -> None:
    policy = ContentPolicy()
    policy.set_tag_rule("p", "not valid")

    with pytest.raises(InvalidContentError):
        content_tree_to_html([NodeElement(tag="p")], policy)


def test_content_must_be_a_list() -> None:
    with pytest.raises(InvalidContentError):
        content_tree_to_html("<p>text</p>")
