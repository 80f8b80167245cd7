import json

from deploy_models import DeploySummary, ErrorEntry, PresentationMode, StyleConfig
from report_renderer import (
    COMPONENTS_HEADER,
    COMPONENTS_SUMMARY_HEADER,
    ERRORS_HEADER,
    SUMMARY_HEADER,
    build_artifact_index,
    build_error_list,
    dump_raw,
    render_artifacts,
    render_errors,
    render_raw,
    render_report,
    render_summary,
)

PLAIN = StyleConfig.resolve(colors=False, glyphs=False)
COLORED = StyleConfig.resolve(colors=True, glyphs=True)


def _line(label, value):
    return f"    {label:<26} : {value}"


def test_render_summary_fixed_labels_and_order():
    summary = DeploySummary(created_by_name="Raj Rajen", status="Succeeded", number_components_total=2)

    lines = render_summary(summary)

    assert lines[0] == "    Created By" + " " * 16 + " : Raj Rajen"
    assert lines[6] == "    Total Number of Components : 2"
    assert [l.split(":")[0].strip() for l in lines] == [
        "Created By", "Created Date", "Completed Date", "Check Only", "Run Tests Enabled",
        "Status", "Total Number of Components", "Success Count", "Failure Count",
    ]


def test_render_summary_marks_every_absent_field():
    lines = render_summary(DeploySummary(status="InProgress"))

    assert len(lines) == 9
    assert lines[5] == _line("Status", "InProgress")
    assert [l for l in lines if l.endswith(" : None")] == lines[:5] + lines[6:]


def test_artifact_index_groups_successes_then_failures():
    successes = [
        {"fullName": "Foo", "componentType": "ApexClass"},
        {"fullName": "Hdr", "componentType": "Layout"},
    ]
    failures = [{"fullName": "Baz", "componentType": "ApexClass", "problem": "x"}]

    index = build_artifact_index(successes, failures, COLORED)

    assert index == {
        "ApexClass": ["\x1b[32m✔ Foo\x1b[0m", "\x1b[31m✖ Baz\x1b[0m"],
        "Layout": ["\x1b[32m✔ Hdr\x1b[0m"],
    }


def test_artifact_index_skips_untyped_records_and_keeps_duplicates_per_record():
    successes = [{"fullName": "A", "componentType": "Flow"}, {"fullName": "B"}, {"fullName": "C", "componentType": ""}]
    failures = [{"fullName": "A", "componentType": "Flow"}, {"fullName": "D", "componentType": "flow"}]

    index = build_artifact_index(successes, failures, PLAIN)

    assert index == {"Flow": ["A", "A"], "flow": ["D"]}
    assert sum(len(v) for v in index.values()) == 3


def test_error_list_keeps_every_failure_in_order():
    failures = [
        {"fullName": "Baz", "componentType": "ApexClass", "problem": "Compile error", "lineNumber": 5, "columnNumber": 12},
        {"fullName": "Untyped", "problem": "Unknown type"},
    ]

    errors = build_error_list(failures)

    assert errors == [
        ErrorEntry("Baz", "ApexClass", "Compile error", None, 5, 12),
        ErrorEntry("Untyped", None, "Unknown type", None, None, None),
    ]


def test_render_errors_with_and_without_location():
    errors = build_error_list([
        {"fullName": "Baz", "componentType": "ApexClass", "problem": "Compile error", "lineNumber": 5, "columnNumber": 12},
        {"fullName": "Sel", "componentType": "Flow", "problem": "Bad", "lineNumber": 0, "columnNumber": 3},
        {"fullName": "Lay", "componentType": "Layout", "problem": "Missing field"},
    ])

    assert render_errors(errors) == [
        "",
        ERRORS_HEADER,
        "ApexClass/Baz(5:12) : Compile error",
        "Flow/Sel : Bad",
        "Layout/Lay : Missing field",
    ]


def test_render_errors_empty_emits_nothing():
    assert render_errors([]) == []


def test_untyped_failure_is_an_error_but_not_an_artifact():
    failures = [{"fullName": "Baz", "problem": "Unknown component type"}]

    assert build_artifact_index([], failures, PLAIN) == {}
    assert render_errors(build_error_list(failures))[-1] == "None/Baz : Unknown component type"


def test_render_artifacts_full_mode_sorts_types_and_labels():
    index = {"Layout": ["Zed", "Alpha"], "ApexClass": ["Foo", "Bar"]}

    assert render_artifacts(index, PresentationMode.FULL) == [
        "",
        COMPONENTS_HEADER,
        "ApexClass",
        "    Bar",
        "    Foo",
        "Layout",
        "    Alpha",
        "    Zed",
    ]


def test_render_artifacts_summary_mode_counts_per_type():
    successes = [
        {"fullName": "Foo", "componentType": "ApexClass"},
        {"fullName": "Bar", "componentType": "ApexClass"},
    ]
    failures = [{"fullName": "cmp", "componentType": "LightningComponent", "problem": "x"}]
    index = build_artifact_index(successes, failures, COLORED)

    assert render_artifacts(index, PresentationMode.SUMMARY) == [
        "",
        COMPONENTS_SUMMARY_HEADER,
        "    ApexClass (2)",
        "    LightningComponent (1)",
    ]


def test_render_artifacts_empty_index_emits_nothing():
    assert render_artifacts({}, PresentationMode.FULL) == []
    assert render_artifacts({}, PresentationMode.SUMMARY) == []


def test_decorated_labels_sort_with_their_color_codes():
    successes = [{"fullName": "Alpha", "componentType": "ApexClass"}]
    failures = [{"fullName": "Zeta", "componentType": "ApexClass", "problem": "x"}]

    colored = render_artifacts(build_artifact_index(successes, failures, COLORED), PresentationMode.FULL)
    plain = render_artifacts(build_artifact_index(successes, failures, PLAIN), PresentationMode.FULL)

    # red (31) sorts ahead of green (32)
    assert colored[3:] == ["    \x1b[31m✖ Zeta\x1b[0m", "    \x1b[32m✔ Alpha\x1b[0m"]
    assert plain[3:] == ["    Alpha", "    Zeta"]


def test_scenario_all_succeeded_full_mode():
    doc = {
        "status": "Succeeded",
        "numberComponentsTotal": 2,
        "numberComponentsDeployed": 2,
        "numberComponentErrors": 0,
        "componentSuccesses": [
            {"fullName": "Foo", "componentType": "ApexClass"},
            {"fullName": "Bar", "componentType": "ApexClass"},
        ],
    }

    lines = render_report(doc, "0Afq000001HKFDO", PresentationMode.FULL, PLAIN)

    assert lines[-5:] == ["", COMPONENTS_HEADER, "ApexClass", "    Bar", "    Foo"]
    assert ERRORS_HEADER not in lines
    assert _line("Failure Count", 0) in lines


def test_render_report_full_document(deploy_request):
    lines = render_report(deploy_request, "0Afq000001HzQ1qCAF", PresentationMode.FULL, PLAIN)

    assert lines == [
        "",
        "Deployment Result for Id 0Afq000001HzQ1qCAF",
        "",
        SUMMARY_HEADER,
        _line("Created By", "Raj Rajen"),
        _line("Created Date", "2021-03-15T22:55:21.000+0000"),
        _line("Completed Date", "2021-03-15T22:57:38.000+0000"),
        _line("Check Only", True),
        _line("Run Tests Enabled", False),
        _line("Status", "Failed"),
        _line("Total Number of Components", 6),
        _line("Success Count", 4),
        _line("Failure Count", 2),
        "",
        COMPONENTS_HEADER,
        "ApexClass",
        "    AccountService",
        "    InvoiceBuilder",
        "    OrderTriggerHelper",
        "CustomField",
        "    Order__c.Status__c",
        "LightningComponentBundle",
        "    orderSummary",
        "",
        ERRORS_HEADER,
        "ApexClass/InvoiceBuilder(42:9) : Variable does not exist: total",
        "CustomField/Order__c.Status__c : Picklist value not found",
    ]


def test_render_report_empty_document_is_summary_only():
    lines = render_report({}, "0Afq000001HKFDO", PresentationMode.SUMMARY, PLAIN)

    assert lines[:4] == ["", "Deployment Result for Id 0Afq000001HKFDO", "", SUMMARY_HEADER]
    assert len(lines) == 13
    assert all(l.endswith(" : None") for l in lines[4:])


def test_render_report_is_repeatable(deploy_request):
    first = render_report(deploy_request, "0Afq000001HzQ1qCAF", PresentationMode.FULL, COLORED)
    second = render_report(deploy_request, "0Afq000001HzQ1qCAF", PresentationMode.FULL, COLORED)

    assert first == second


def test_raw_mode_is_the_document_and_nothing_else(deploy_request):
    lines = render_report(deploy_request, "0Afq000001HzQ1qCAF", PresentationMode.RAW, COLORED)

    assert len(lines) == 1
    assert json.loads(lines[0]) == deploy_request
    assert render_raw(deploy_request) is deploy_request
    assert dump_raw(deploy_request) == lines[0]


def test_non_string_component_types_are_treated_as_untyped():
    doc = {
        "componentSuccesses": [
            {"fullName": "Foo", "componentType": "ApexClass"},
            {"fullName": "Num", "componentType": 7},
        ],
        "componentFailures": [
            {"fullName": "Obj", "componentType": {"name": "ApexClass"}, "problem": "bad type"},
            {"fullName": "Seq", "componentType": ["ApexClass"], "problem": "bad type", "lineNumber": 3, "columnNumber": 1},
        ],
    }

    full = render_report(doc, "0Afq000001HKFDO", PresentationMode.FULL, PLAIN)
    summary = render_report(doc, "0Afq000001HKFDO", PresentationMode.SUMMARY, PLAIN)

    assert full[-8:] == [
        "",
        COMPONENTS_HEADER,
        "ApexClass",
        "    Foo",
        "",
        ERRORS_HEADER,
        "{'name': 'ApexClass'}/Obj : bad type",
        "['ApexClass']/Seq(3:1) : bad type",
    ]
    assert "    ApexClass (1)" in summary
