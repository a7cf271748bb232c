import asyncio

import streamlit as st

from tablesnap.app_context import EXTRACTION_ACTION, get_facade, get_settings, get_slot
from tablesnap.csv_decoder import decode
from tablesnap.errors import InvalidUpload, user_message
from tablesnap.logging_config import logger
from tablesnap.models import Failure, Success
from tablesnap.preview import CSV_FILENAME, needs_raw_fallback, table_to_frame
from tablesnap.uploads import UPLOAD_EXTENSIONS, check_upload

settings = get_settings()
slot = get_slot(EXTRACTION_ACTION)

st.title("📋 Image to CSV")
st.caption("Upload an image containing a table and get CSV text you can paste into Excel.")

uploaded_file = st.file_uploader(
    "Upload an image containing a table",
    type=UPLOAD_EXTENSIONS,
    key="csv_upload",
)

image = None
if uploaded_file is not None:
    try:
        image = check_upload(uploaded_file.getvalue(), uploaded_file.type, settings)
    except InvalidUpload as exc:
        logger.warning("CSV extractor rejected upload: %s", exc.message)
        st.error(user_message(exc))
    else:
        st.image(image.data, caption=uploaded_file.name, width=480)

with st.expander("Tips for best results", expanded=False):
    st.markdown(
        "- Ensure the image is clear and well-lit.\n"
        "- Avoid handwriting; printed text works best.\n"
        "- Make sure the entire table is visible in the frame."
    )

convert_clicked = st.button(
    "Convert to CSV",
    type="primary",
    disabled=image is None or slot.is_pending,
)

if convert_clicked and image is not None:
    with slot.running() as request_id, st.spinner("Extracting data..."):
        try:
            raw_text = asyncio.run(get_facade().extract_table(image))
        except Exception as exc:  # noqa: BLE001
            logger.exception("CSV extraction failed request_id=%s", request_id)
            slot.fail(request_id, exc)
        else:
            slot.resolve(request_id, raw_text)

outcome = slot.outcome

if isinstance(outcome, Failure):
    st.error(outcome.reason)
elif isinstance(outcome, Success):
    raw_text: str = outcome.payload
    st.divider()
    st.subheader("Extracted Data")

    table_tab, raw_tab = st.tabs(["Table Preview", "Raw CSV"])
    with raw_tab:
        st.code(raw_text, language=None)
        st.download_button(
            "Download CSV",
            data=raw_text.encode("utf-8"),
            file_name=CSV_FILENAME,
            mime="text/csv",
        )
    with table_tab:
        table = decode(raw_text)
        if not raw_text:
            st.info("The model returned no text for this image.")
        elif needs_raw_fallback(raw_text, table):
            st.warning("Could not parse table data. Check the Raw CSV view.")
        else:
            st.dataframe(table_to_frame(table), width="stretch")
            st.caption(f"{len(table)} row(s)")
else:
    st.info("Upload an image to extract data.")
