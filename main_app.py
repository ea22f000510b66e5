import logging

import streamlit as st

from vistoria.export import (
    to_csv_bytes,
    to_display_table,
    to_excel_bytes,
    to_table,
)
from vistoria.models import (
    DEFECT_LABELS,
    EQUIPMENTS,
    STATUS_DEFECTIVE,
    STATUS_LABELS,
    find_equipment,
)
from vistoria.settings import (
    COMPANY_SEGMENTS,
    COMPANY_SEGMENT_LENGTH,
    EXPORT_CSV_FILENAME,
    EXPORT_FILENAME,
    PAGE_ICON,
    PAGE_TITLE,
    setup_logging,
)
from vistoria.workflow import (
    VIEW_DASHBOARD,
    VIEW_LOGGED_OUT,
    VIEW_NEW_INSPECTION,
    WorkflowController,
)

# ------------------------------------------------------
# Page Configuration
# ------------------------------------------------------
st.set_page_config(page_title=PAGE_TITLE, page_icon=PAGE_ICON, layout="wide")
setup_logging()
logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "company": "Código da Empresa",
    "equipment": "Equipamento",
    "model": "Modelo",
    "status": "Status do Equipamento",
    "defect_type": "Tipo de Defeito",
}

# one controller (and its session context) per browser session
if "workflow" not in st.session_state:
    st.session_state.workflow = WorkflowController()
wf: WorkflowController = st.session_state.workflow


# ------------------------------------------------------
# Login
# ------------------------------------------------------
def render_login():
    st.title("🔐 Login do Analista")
    with st.form("login_form"):
        analyst = st.text_input("Nome do Analista", key="login_name")
        code = st.text_input("Código", type="password", key="login_code")
        submitted = st.form_submit_button("Entrar", use_container_width=True)
    if submitted:
        if wf.submit_login(analyst, code):
            st.rerun()
        else:
            st.error("Nome do Analista e Código são obrigatórios.")


# ------------------------------------------------------
# Dashboard
# ------------------------------------------------------
def render_export_buttons(inspections):
    table = to_table(inspections)
    col_xlsx, col_csv = st.columns(2)
    try:
        with col_xlsx:
            st.download_button(
                "⬇️ Exportar para Excel",
                data=to_excel_bytes(table).getvalue(),
                file_name=EXPORT_FILENAME,
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                key="export_xlsx",
                use_container_width=True,
            )
        with col_csv:
            st.download_button(
                "⬇️ Exportar CSV",
                data=to_csv_bytes(table),
                file_name=EXPORT_CSV_FILENAME,
                mime="text/csv",
                key="export_csv",
                use_container_width=True,
            )
    except Exception as e:
        logger.exception("Export failed")
        st.error(f"Falha na exportação: {e}")


def render_dashboard():
    col_title, col_user = st.columns([4, 1])
    with col_title:
        st.title(f"📋 {PAGE_TITLE}")
    with col_user:
        st.caption(f"Analista: {wf.context.identity.analyst}")

    inspections = wf.context.log.all()

    k1, k2, k3 = st.columns(3)
    k1.metric("Vistorias", len(inspections))
    k2.metric("Empresas", len(wf.context.registry))
    k3.metric("Com Defeito", sum(1 for i in inspections if i.status == STATUS_DEFECTIVE))

    st.divider()

    left, right = st.columns([1, 1])
    with left:
        st.button(
            "➕ Nova Vistoria de Equipamento",
            key="new_inspection",
            on_click=wf.request_new_inspection,
            type="primary",
        )
    with right:
        render_export_buttons(inspections)

    if inspections:
        st.dataframe(to_display_table(inspections), use_container_width=True, hide_index=True)
    else:
        st.info("Nenhuma vistoria registrada nesta sessão.")


# ------------------------------------------------------
# New inspection form
# ------------------------------------------------------
def render_inspection_form():
    st.title("📋 Nova Vistoria de Equipamento")
    draft = wf.draft
    serial = wf.form_serial

    st.markdown("**Código da Empresa**")
    boxes = st.columns(COMPANY_SEGMENTS + 3)
    company = []
    for i in range(COMPANY_SEGMENTS):
        with boxes[i]:
            company.append(st.text_input(
                f"Empresa {i + 1}",
                max_chars=COMPANY_SEGMENT_LENGTH,
                placeholder="000",
                label_visibility="collapsed",
                key=f"company_{i}_{serial}",
            ))

    col1, col2 = st.columns(2)
    with col1:
        equipment_id = st.selectbox(
            "Equipamento",
            options=[eq.id for eq in EQUIPMENTS],
            index=None,
            format_func=lambda eq_id: find_equipment(eq_id).name,
            placeholder="Selecione o equipamento",
            key=f"equipment_{serial}",
        )
        status = st.selectbox(
            "Status do Equipamento",
            options=list(STATUS_LABELS),
            index=None,
            format_func=STATUS_LABELS.get,
            placeholder="Selecione o status",
            key=f"status_{serial}",
        )
    with col2:
        equipment = find_equipment(equipment_id)
        # keyed by equipment so a new equipment choice clears the model
        model = st.selectbox(
            "Modelo",
            options=list(equipment.models) if equipment else [],
            index=None,
            placeholder="Selecione o modelo",
            disabled=equipment is None,
            key=f"model_{serial}_{equipment_id}",
        )
        defect_type = None
        if status == STATUS_DEFECTIVE:
            defect_type = st.selectbox(
                "Tipo de Defeito",
                options=list(DEFECT_LABELS),
                index=None,
                format_func=DEFECT_LABELS.get,
                placeholder="Selecione a gravidade",
                key=f"defect_{serial}",
            )

    draft.company = company
    draft.equipment_id = equipment_id
    draft.model = model
    draft.status = status
    draft.defect_type = defect_type

    st.subheader("Áreas com Problema")
    area_cols = st.columns(len(draft.areas))
    for i, area in enumerate(draft.areas):
        with area_cols[i]:
            st.button(
                f"⚠️ {area.name}" if area.has_issue else area.name,
                key=f"area_{i}_{serial}",
                on_click=wf.toggle_area,
                args=(i,),
                type="primary" if area.has_issue else "secondary",
                use_container_width=True,
            )

    st.divider()
    cbtn1, cbtn2 = st.columns(2)
    with cbtn1:
        st.button(
            "Cancelar",
            key=f"cancel_{serial}",
            on_click=wf.cancel_new_inspection,
            use_container_width=True,
        )
    with cbtn2:
        if st.button("Registrar Vistoria", key=f"submit_{serial}", type="primary", use_container_width=True):
            missing = draft.missing_fields()
            if missing:
                for name in missing:
                    st.error(f"{FIELD_LABELS[name]} é obrigatório.")
            elif wf.submit_inspection() is not None:
                st.rerun()


# ------------------------------------------------------
# Router
# ------------------------------------------------------
if wf.view == VIEW_LOGGED_OUT:
    render_login()
elif wf.view == VIEW_NEW_INSPECTION:
    render_inspection_form()
elif wf.view == VIEW_DASHBOARD:
    render_dashboard()
