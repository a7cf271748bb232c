"""Process- and session-scoped objects shared by the Streamlit pages."""

import streamlit as st

from tablesnap.config import Settings
from tablesnap.facade import GenerationFacade, build_facade
from tablesnap.session import ActionSlot

EXTRACTION_ACTION = "table_extraction"
EDIT_ACTION = "image_edit"


@st.cache_resource
def get_settings() -> Settings:
    return Settings.from_env()


@st.cache_resource
def get_facade() -> GenerationFacade:
    return build_facade(get_settings())


def get_slot(name: str) -> ActionSlot:
    key = f"slot_{name}"
    if key not in st.session_state:
        st.session_state[key] = ActionSlot(name)
    return st.session_state[key]
