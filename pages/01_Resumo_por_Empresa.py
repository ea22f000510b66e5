# pages/01_Resumo_por_Empresa.py
import pandas as pd
import plotly.express as px
import streamlit as st

from vistoria.export import company_summary, status_label
from vistoria.settings import PAGE_ICON

st.set_page_config(page_title="Resumo por Empresa", page_icon=PAGE_ICON, layout="wide")

st.title("🏢 Resumo por Empresa")

wf = st.session_state.get("workflow")
if wf is None or wf.context.identity is None:
    st.info("Faça login na página principal para ver o resumo.")
    st.stop()

st.caption(f"Analista: {wf.context.identity.analyst}")
inspections = wf.context.log.all()
if not inspections:
    st.info("Nenhuma vistoria registrada nesta sessão.")
    st.stop()

st.divider()

colA, colB = st.columns(2)

with colA:
    st.subheader("Empresas vistoriadas")
    st.dataframe(
        company_summary(wf.context.registry, inspections),
        use_container_width=True,
        hide_index=True,
    )

with colB:
    df_status = (
        pd.DataFrame({"Status": [status_label(i) for i in inspections]})
        .value_counts()
        .reset_index(name="Quantidade")
    )
    fig_status = px.pie(
        df_status,
        names="Status",
        values="Quantidade",
        title="Distribuição por Status",
        color_discrete_sequence=px.colors.qualitative.Safe,
    )
    st.plotly_chart(fig_status, use_container_width=True)
