from typing import List
import streamlit as st
from core.types import ReportData, ResultItem
from core.utils import color_box, status_label
from core.results import deduplicate_tests, with_statuses
from core.test_names import normalize, categorize, sort_rank, is_status_sti

id = "status"
title = "Overall Status"


def inputs(data: ReportData) -> ReportData:
    return data


def overall_status(statuses: List[str]) -> str:
    if not statuses:
        return "pending"
    if "positive" in statuses:
        return "positive"
    if any(s != "negative" for s in statuses):
        return "pending"
    return "negative"


def compute(data: ReportData) -> List[ResultItem]:
    tests = deduplicate_tests(with_statuses(data.tests)).tests
    overall = overall_status([t.status for t in tests])

    if overall == "negative":
        text = "All reported tests are negative."
    elif overall == "positive":
        text = "At least one test is positive."
    elif tests:
        text = "Some results need review before sharing."
    else:
        text = "No test results to summarise."

    r: List[ResultItem] = [ResultItem("Overall status", status_label(overall), text, overall, category="", rank=0)]
    r.append(ResultItem("Tests reported", str(len(tests)), "Unique tests after removing duplicates.", "info", category=""))
    if data.collection_date:
        r.append(ResultItem("Last tested", data.collection_date, "Collection date on the report.", "info", category=""))

    # lifelong conditions are shown on their own so they are not mistaken for curable results
    for t in tests:
        label = normalize(t.name)
        if t.status == "positive" and is_status_sti(label):
            r.append(ResultItem(
                label, t.result, "Lifelong-status condition: confirm with a clinician before sharing.",
                "positive", category=categorize(t.name), rank=sort_rank(t.name),
            ))
    return r


def render(results: List[ResultItem]) -> None:
    for x in results:
        if x.severity == "info":
            st.caption(f"{x.metric}: {x.value} — {x.interpretation}")
        else:
            color_box(f"{x.metric}: {x.value} • {x.interpretation}", level=x.severity)


def to_pdf(results: List[ResultItem]) -> List[list[str]]:
    rows = []
    for x in results:
        status = "" if x.severity == "info" else status_label(x.severity)
        rows.append([x.metric, x.category or "—", "—" if x.value is None else str(x.value), status])
    return rows
