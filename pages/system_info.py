import os
from datetime import datetime

import streamlit as st

from tablesnap.app_context import get_settings
from tablesnap.config import validate_settings
from tablesnap.logging_config import logger
from tablesnap.prompts import CSV_EXTRACTION_PROMPT_VERSION

settings = get_settings()

st.title("🔧 System Information")

st.write(f"**App Version:** {settings.version}")
st.write(f"**Current Time:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
st.write(f"**Working Directory:** {os.getcwd()}")

st.write("**Generation Settings:**")
st.write(f"- Provider: `{settings.provider}`")
st.write(f"- Extraction model: `{settings.extraction_model}`")
st.write(f"- Edit model: `{settings.edit_model}`")
st.write(f"- Extraction prompt: `{CSV_EXTRACTION_PROMPT_VERSION}`")
st.write(f"- Request timeout: {settings.request_timeout:g} s")
st.write(f"- Max upload size: {settings.max_image_bytes // (1024 * 1024)} MiB")
st.write(f"- API key: {'✅ configured' if settings.has_credential else '❌ missing'}")

issues = validate_settings(settings)
if issues:
    for issue in issues:
        st.write(f"❌ {issue}")
else:
    st.write("✅ Configuration complete")

logger.debug("Session state keys: %s", list(st.session_state.keys()))
st.caption("Session state logged to terminal.")
