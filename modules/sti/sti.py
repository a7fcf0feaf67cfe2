from typing import List
import pandas as pd
import streamlit as st
from core.types import ReportData, LabTest, ResultItem
from core.utils import color_box, status_label
from core.results import standardize_result, deduplicate_tests, with_statuses
from core.test_names import normalize, categorize, sort_rank, CATEGORIES

id = "sti"
title = "STI Results"

INTERPRETATION = {
    "negative": "Not detected / non-reactive.",
    "positive": "Positive; follow up with a clinician.",
    "pending": "Needs review: result could not be read as positive or negative.",
    "inconclusive": "Inconclusive; a retest may be needed.",
}


def inputs(data: ReportData) -> ReportData:
    st.caption("Check the parsed results. Add or correct rows as they appear on your report.")
    df = pd.DataFrame(
        [{"Test name": t.name, "Result": t.result} for t in data.tests],
        columns=["Test name", "Result"],
    )
    edited = st.data_editor(df, num_rows="dynamic", key="sti_tests")

    tests: List[LabTest] = []
    for row in edited.to_dict("records"):
        # new editor rows come back as NaN/None
        name = str(row["Test name"]).strip() if pd.notna(row.get("Test name")) else ""
        result = str(row["Result"]).strip() if pd.notna(row.get("Result")) else ""
        if not name and not result:
            continue
        tests.append(LabTest(name=name, result=result, status=standardize_result(result)))
    data.tests = tests
    return data


def _item(t: LabTest) -> ResultItem:
    return ResultItem(
        metric=normalize(t.name),
        value=t.result or None,
        interpretation=INTERPRETATION.get(t.status, INTERPRETATION["pending"]),
        severity=t.status,
        category=categorize(t.name),
        rank=sort_rank(t.name),
    )


def compute(data: ReportData) -> List[ResultItem]:
    dedup = deduplicate_tests(with_statuses(data.tests))
    data.flags["conflicts"] = dedup.conflicts

    r = sorted((_item(t) for t in dedup.tests), key=lambda x: (x.rank, x.metric))

    # conflicts go last as plain notes
    for c in dedup.conflicts:
        seen = ", ".join(sorted({status_label(o.status) for o in c.occurrences}))
        r.append(ResultItem(
            metric="",
            value=None,
            interpretation=f"{normalize(c.test_name)} appears more than once with different results ({seen}); showing {status_label(c.suggested.status)}.",
            severity="info",
        ))
    return r


def render(results: List[ResultItem]) -> None:
    if not results:
        st.info("No test results yet.")
        return
    rows = [x for x in results if x.metric]
    for cat in CATEGORIES:
        group = [x for x in rows if x.category == cat]
        if not group:
            continue
        st.subheader(cat)
        for x in group:
            color_box(f"{x.metric}: {x.value or '—'} • {status_label(x.severity)}", level=x.severity)
    for x in results:
        if not x.metric:
            color_box(x.interpretation, level=x.severity)


def to_pdf(results: List[ResultItem]) -> List[list[str]]:
    rows = []
    for x in results:
        if x.metric:
            rows.append([x.metric, x.category, "—" if x.value is None else str(x.value), status_label(x.severity)])
    return rows
