import re
from typing import Dict, List, Optional, Tuple

import streamlit as st
from loguru import logger

from core.results import standardize_result
from core.types import LabTest, ReportData

try:
    import pdfplumber
    PDF_ENABLED = True
except ImportError:
    PDF_ENABLED = False


# ----------------------------
# Demographics / header fields
# ----------------------------
STRICT: Dict[str, str] = {
    "patient_name": r"(?:Patient\s*Name|Name)\s*[:\-]\s*([A-Za-z][A-Za-z\s\.\-',]{1,60}?)(?=\s+(?:barcode|id|patient\s*id|dob|sex|\d)|$)",
    "collection_date": r"(?:Date\s+of\s+Collection|Collection\s+Date|Date\s+Collected)\s*[:\-]\s*([^\n]+)",
    "lab_name": r"(LifeLabs|Dynacare|Public\s+Health\s+Ontario|Quest\s+Diagnostics|LabCorp)",
}

LOOSE: Dict[str, str] = {
    "patient_name": r"(?:Patient\s*Name|Name)[^\n]{0,20}?([A-Za-z][A-Za-z\s\.\-',]{1,60}?)(?=\s+(?:barcode|id|patient\s*id|dob|sex|\d)|$)",
    "collection_date": r"(?:Date\s+of\s+Collection|Collection\s+Date|Date\s+Collected)\s*([^\n]+)",
    "lab_name": r"(Laboratory|Lab)\s*[:\-]\s*([^\n]+)",
}

# ----------------------------
# Test rows: (name, row prefix)
# ----------------------------
# Result values as printed by LifeLabs / public health lab reports. Longer
# phrases go first so "Not Detected" is not read as "Detected".
RESULT = (
    r"(Non-Reactive|Reactive|Not\s+Detected|Detected|Negative|Positive|"
    r"Indeterminate|Equivocal|Not\s+Immune|Immune|\d+(?:\.\d+)?\s*[A-Za-z/]+)"
)

TEST_ROWS: List[Tuple[str, str]] = [
    # LifeLabs NAAT rows: "CHLAMYDIA TRACHOMATIS NEGATIVE" or "... DNA (NAAT) Urine NEGATIVE"
    ("Chlamydia trachomatis", r"Chlamydia\s+trachomatis(?:\s+DNA\s+\(NAAT\)\s+[A-Za-z]+)?"),
    ("Neisseria gonorrhoeae", r"Neisseria\s+gonorrhoeae(?:\s+DNA\s+\(NAAT\)\s+[A-Za-z]+)?"),
    ("Trichomonas vaginalis", r"Trichomonas\s+vaginalis\s+DNA\s+\(NAAT\)\s+[A-Za-z]+"),
    # Public health lab serology
    ("Hepatitis A IgG Antibody", r"Hepatitis\s+A\s+IgG\s+Antibody"),
    ("Hepatitis B Surface Antigen", r"Hepatitis\s+B\s+Surface\s+Antigen"),
    ("Hepatitis B Core Total Antibody", r"Hepatitis\s+B\s+Core\s+Total\s+(?:\(IgG\+IgM\)\s+)?Antibody"),
    ("Hepatitis C Antibody", r"Hepatitis\s+C\s+Antibody"),
    # screen and final interpretation are separate rows on the report; both
    # normalize to "HIV-1/2 Antibody" and are listed as two results
    ("HIV 1/2 Ag/Ab Combo Screen", r"HIV\s*1/2\s+Ag/Ab\s+Combo\s+Screen"),
    ("HIV Final Interpretation", r"HIV\s+Final\s+Interpretation"),
    ("Syphilis Antibody Screen", r"Syphilis\s+(?:Antibody|Ab)\s+Screen"),
    ("RPR", r"\bRPR\b"),
    ("Herpes Simplex Virus 1 IgG", r"(?:Herpes\s+Simplex\s+Virus|HSV)[\s\-]*1\s+IgG"),
    ("Herpes Simplex Virus 2 IgG", r"(?:Herpes\s+Simplex\s+Virus|HSV)[\s\-]*2\s+IgG"),
]


def _find(pattern: str, text: str) -> Optional[str]:
    m = re.search(pattern, text, flags=re.I)
    if m:
        value = m.group(m.lastindex or 0).strip()
        return value or None
    return None


def _clean_name(value: Optional[str]) -> Optional[str]:
    # drop trailing barcode/id that the lazy match sometimes keeps
    if not value:
        return value
    return re.sub(r"\s+(barcode|id|patient\s*id)\b.*$", "", value, flags=re.I).strip() or None


def extract_tests(text: str) -> List[LabTest]:
    tests: List[LabTest] = []
    for name, prefix in TEST_ROWS:
        for m in re.finditer(prefix + r"[\s:]+" + RESULT, text, flags=re.I):
            result = re.sub(r"\s+", " ", m.group(1)).strip()
            tests.append(LabTest(name=name, result=result, status=standardize_result(result)))
    return tests


def parse_text(raw_text: str) -> ReportData:
    """Pull header fields and STI test rows out of report text."""
    # normalise whitespace a bit
    t = re.sub(r"[^\S\r\n]+", " ", raw_text or "", flags=re.M)

    report = ReportData(
        patient_name=_clean_name(_find(STRICT["patient_name"], t) or _find(LOOSE["patient_name"], t)),
        collection_date=_find(STRICT["collection_date"], t) or _find(LOOSE["collection_date"], t),
        lab_name=_find(STRICT["lab_name"], t) or _find(LOOSE["lab_name"], t),
        tests=extract_tests(t),
    )
    logger.info(f"Parsed {len(report.tests)} test rows (lab={report.lab_name!r})")
    return report


def extract_text(file) -> str:
    try:
        with pdfplumber.open(file) as pdf:
            return "\n".join(page.extract_text() or "" for page in pdf.pages)
    except Exception:
        logger.exception("Could not read PDF")
        return ""


def parse_pdf() -> ReportData:
    empty = ReportData(None, None, None)

    with st.expander("Upload Lab PDF (optional)", expanded=True):
        if not PDF_ENABLED:
            st.info("PDF parsing not available on this env.")
            return empty

        up = st.file_uploader("Upload STI lab report (text-based PDF)", type=["pdf"])
        if up is None:
            return empty

        raw_text = extract_text(up)
        if not raw_text:
            st.warning("No text found in this PDF. Scanned reports are not supported; enter results below.")
            return empty

        report = parse_text(raw_text)

        # Show what we got
        if report.tests or report.patient_name:
            st.success("Parsed from PDF:")
            st.json({
                "patient_name": report.patient_name,
                "collection_date": report.collection_date,
                "lab_name": report.lab_name,
                "tests": [{"name": x.name, "result": x.result} for x in report.tests],
            })
        else:
            st.warning("No STI test results recognised in this PDF.")

    return report
