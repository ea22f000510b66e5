from openpyxl import load_workbook

from vistoria.export import (
    EXPORT_COLUMNS,
    company_summary,
    to_csv_bytes,
    to_display_table,
    to_excel_bytes,
    to_table,
)


def test_row_count_and_order_follow_log(logged_in, submit, make_draft):
    for company in ("A", "B", "C"):
        submit(logged_in, make_draft(company=(company, "", "")))

    table = to_table(logged_in.context.log.all())

    assert len(table) == len(logged_in.context.log)
    assert list(table["Empresa"]) == ["C--", "B--", "A--"]
    assert list(table.columns) == EXPORT_COLUMNS


def test_row_fields_are_human_readable(logged_in, submit):
    inspection = submit(logged_in)
    row = to_table([inspection]).iloc[0]

    assert row["Data/Hora da Vistoria"] == "05/03/2024, 09:30:00"
    assert row["Hora Início da Empresa"] == "05/03/2024, 09:30:00"
    assert row["Equipamento"] == "Pistola Leitora"
    assert row["Modelo"] == "MC-330K"
    assert row["Status"] == "Em Uso"
    assert row["Analista"] == "Ana Souza"
    assert row["Áreas com Problema"] == ""


def test_defect_label_includes_severity(logged_in):
    logged_in.request_new_inspection()
    logged_in.toggle_area(0)
    draft = logged_in.draft
    draft.company = ["1", "2", "3"]
    draft.equipment_id = "1"
    draft.model = "DS2208"
    draft.status = "defeito"
    draft.defect_type = "grave"
    inspection = logged_in.submit_inspection()

    row = to_table([inspection]).iloc[0]
    assert row["Status"] == "Defeito grave"
    assert row["Áreas com Problema"] == "Tela"


def test_not_in_use_label_and_multiple_areas(logged_in):
    logged_in.request_new_inspection()
    logged_in.toggle_area(1)
    logged_in.toggle_area(4)
    draft = logged_in.draft
    draft.company = ["9", "", ""]
    draft.equipment_id = "2"
    draft.model = "ZT411"
    draft.status = "nao_em_uso"
    row = to_table([logged_in.submit_inspection()]).iloc[0]

    assert row["Status"] == "Não em Uso"
    assert row["Áreas com Problema"] == "Fio, Leitor"


def test_empty_log_gives_empty_table_with_headers():
    table = to_table([])
    assert table.empty
    assert list(table.columns) == EXPORT_COLUMNS


def test_display_table_uses_dashboard_headers(logged_in, submit):
    submit(logged_in)
    table = to_display_table(logged_in.context.log.all())
    assert list(table.columns) == [
        "Data/Hora", "Início Vistoria", "Empresa", "Equipamento",
        "Modelo", "Status", "Problemas", "Analista",
    ]


def test_excel_export_writes_vistorias_sheet(logged_in, submit):
    submit(logged_in)
    submit(logged_in)
    buf = to_excel_bytes(to_table(logged_in.context.log.all()))

    wb = load_workbook(buf)
    assert wb.sheetnames == ["Vistorias"]
    rows = list(wb["Vistorias"].iter_rows(values_only=True))
    assert list(rows[0]) == EXPORT_COLUMNS
    assert len(rows) == 3


def test_csv_export(logged_in, submit):
    submit(logged_in)
    text = to_csv_bytes(to_table(logged_in.context.log.all())).decode("utf-8")
    lines = text.strip().splitlines()
    assert lines[0].startswith("Data/Hora da Vistoria,")
    assert "1-2-3" in lines[1]


def test_company_summary_counts(logged_in, submit, make_draft):
    submit(logged_in)
    submit(logged_in, make_draft(company=("4", "5", "6")))
    submit(logged_in, make_draft(status="defeito", defect_type="leve"))

    summary = company_summary(logged_in.context.registry, logged_in.context.log.all())

    assert list(summary["Empresa"]) == ["1-2-3", "4-5-6"]
    assert list(summary["Vistorias"]) == [2, 1]
    assert list(summary["Com Defeito"]) == [1, 0]
    assert summary.iloc[0]["Início Vistoria"] == "05/03/2024, 09:30:00"


def test_timestamps_use_pt_br_locale_format(logged_in, submit):
    row = to_table([submit(logged_in)]).iloc[0]
    assert row["Data/Hora da Vistoria"] == "05/03/2024, 09:30:00"
