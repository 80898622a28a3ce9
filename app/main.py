"""
베이커리 운영 대시보드 메인 엔트리 포인트

Run with ``streamlit run app/main.py``. The sidebar holds the backend URL,
a connection test and page navigation; each page owns its own data.
"""

from __future__ import annotations

import logging

import streamlit as st

# 로깅 설정
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

from app import state
from app.pages import forecast, inventory
from bakery_dashboard import __version__

PAGES = {
    "Inventory": inventory.render_inventory_page,
    "Forecast": forecast.render_forecast_page,
}


def _render_backend_settings() -> None:
    st.sidebar.markdown("### Backend")
    config = state.get_api_config()
    base_url = st.sidebar.text_input("Backend URL", value=config.base_url, key="backend_url")

    if base_url and state.set_api_base_url(base_url):
        logger.info(f"Backend URL changed to {state.get_api_config().base_url}")

    if st.sidebar.button("Test connection", key="backend_test"):
        with st.spinner("Checking backend..."):
            connected, message = state.get_api_client().check_connection()
        if connected:
            st.sidebar.success(message)
        else:
            st.sidebar.error(message)


def main() -> None:
    """Entrypoint for running the bakery dashboard in Streamlit."""

    st.set_page_config(page_title="Bakery Ops Dashboard", page_icon="🥐", layout="wide")
    st.title("🥐 Bakery Ops Dashboard")
    st.caption(f"Inventory and demand forecast · v{__version__}")

    page = st.sidebar.radio("Page", list(PAGES), key="page")
    _render_backend_settings()

    PAGES[page]()


if __name__ == "__main__":
    main()
