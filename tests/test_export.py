import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from reqdash.schemas.project import ProjectRead
from reqdash.schemas.requirement import RequirementRead
from reqdash.services.export import build_export, export_filename


def acme():
    return ProjectRead(id=1, name="Acme Co", hourly_rate=50)


def quoted_req():
    return RequirementRead(
        id="abc123",
        requirement='He said "hi"',
        status="Approved",
        priority="High",
        complexity="Low",
        author="Jo",
        date="2024-01-05",
        estimated_time=2,
    )


def test_export_document_layout():
    doc = build_export(acme(), [quoted_req()])
    assert doc.filename == "requirements_Acme_Co_export.csv"
    assert doc.content.split("\n") == [
        "Project Name,Acme Co",
        "Hourly Rate,$50.00",
        "",
        "ID,Requirement,Status,Priority,Complexity,Author,Date,Hours,Cost,Cost/Hour",
        'abc123,"He said ""hi""",Approved,High,Low,Jo,2024-01-05,2,$100.00,$50.00',
        "",
        "Total Hours,2",
        "Total Cost,$100.00",
    ]


def test_export_rows_keep_supplied_order_and_sum_totals():
    reqs = [
        RequirementRead(id="b", requirement="Second", status="Draft", priority="Low",
                        complexity="High", author="Al", date="2024-02-01T23:30:00+00:00",
                        estimated_time=1.5),
        RequirementRead(id="a", requirement="First", status="Review", priority="Medium",
                        complexity="Moderate", author="Bo", date="2024-03-10", estimated_time=4),
    ]
    doc = build_export(ProjectRead(id=2, name="X", hourly_rate=20), reqs)
    lines = doc.content.split("\n")
    assert lines[4] == 'b,"Second",Draft,Low,High,Al,2024-02-01,1.5,$30.00,$20.00'
    assert lines[5] == 'a,"First",Review,Medium,Moderate,Bo,2024-03-10,4,$80.00,$20.00'
    assert lines[-2] == "Total Hours,5.5"
    assert lines[-1] == "Total Cost,$110.00"


def test_export_date_is_converted_to_utc():
    req = RequirementRead(id="z", requirement="Late", status="Draft", priority="Low",
                          complexity="Low", author="Jo", date="2024-01-05T23:30:00-05:00",
                          estimated_time=1)
    doc = build_export(acme(), [req])
    assert ",2024-01-06," in doc.content.split("\n")[4]


def test_export_is_noop_without_project_or_rows():
    assert build_export(None, [quoted_req()]) is None
    assert build_export(acme(), []) is None


def test_export_uses_explicit_rate_over_project_rate():
    doc = build_export(acme(), [quoted_req()], hourly_rate=10)
    assert "Hourly Rate,$10.00" in doc.content
    assert doc.content.endswith("Total Cost,$20.00")


def test_export_filename_replaces_non_alphanumerics():
    assert export_filename("R&D / Q3-2024") == "requirements_R_D___Q3_2024_export.csv"
    assert export_filename("Plain") == "requirements_Plain_export.csv"


def test_export_clamps_negative_rate_everywhere():
    req = RequirementRead(id="1", requirement="x", status="Approved", priority="High",
                          complexity="Low", author="Jo", date="2024-01-05", estimated_time=2)
    doc = build_export(ProjectRead(id=1, name="Acme", hourly_rate=-5), [req])
    lines = doc.content.split("\n")
    assert lines[1] == "Hourly Rate,$0.00"
    assert lines[4] == '1,"x",Approved,High,Low,Jo,2024-01-05,2,$0.00,$0.00'
    assert lines[-1] == "Total Cost,$0.00"
