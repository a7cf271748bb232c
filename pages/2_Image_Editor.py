import asyncio

import streamlit as st
from pydantic import ValidationError

from tablesnap.app_context import EDIT_ACTION, get_facade, get_settings, get_slot
from tablesnap.errors import InvalidUpload, user_message
from tablesnap.logging_config import logger
from tablesnap.models import EditRequest, Failure, ImageAsset, Success
from tablesnap.prompts import EDIT_IDEAS
from tablesnap.uploads import UPLOAD_EXTENSIONS, check_upload

settings = get_settings()
slot = get_slot(EDIT_ACTION)

INSTRUCTION_KEY = "edit_instruction"


def _use_idea(idea: str) -> None:
    st.session_state[INSTRUCTION_KEY] = idea


st.title("🪄 Magic Editor")
st.caption("Upload an image and describe the change you want.")

source_col, result_col = st.columns(2)

with source_col:
    uploaded_file = st.file_uploader(
        "Upload an image to edit",
        type=UPLOAD_EXTENSIONS,
        key="edit_upload",
    )
    image = None
    if uploaded_file is not None:
        try:
            image = check_upload(uploaded_file.getvalue(), uploaded_file.type, settings)
        except InvalidUpload as exc:
            logger.warning("Image editor rejected upload: %s", exc.message)
            st.error(user_message(exc))
        else:
            st.image(image.data, caption="Original", width="stretch")

    instruction = st.text_input(
        "Instruction",
        key=INSTRUCTION_KEY,
        placeholder="e.g. Add a retro filter, remove the person in the background",
    )

    st.caption("Editing ideas")
    idea_cols = st.columns(len(EDIT_IDEAS))
    for col, idea in zip(idea_cols, EDIT_IDEAS):
        with col:
            st.button(idea, key=f"idea_{idea}", on_click=_use_idea, args=(idea,), width="stretch")

    edit_clicked = st.button(
        "Generate",
        type="primary",
        disabled=image is None or not instruction.strip() or slot.is_pending,
    )

if edit_clicked and image is not None:
    try:
        edit_request = EditRequest(image=image, instruction=instruction)
    except ValidationError:
        st.error("Please enter an instruction.")
    else:
        with slot.running() as request_id, st.spinner("Editing image..."):
            try:
                edited = asyncio.run(get_facade().edit_image(edit_request))
            except Exception as exc:  # noqa: BLE001
                logger.exception("Image edit failed request_id=%s", request_id)
                slot.fail(request_id, exc)
            else:
                # Kept as a data URI in session state; decoded again for download.
                slot.resolve(request_id, edited.to_data_uri())

with result_col:
    outcome = slot.outcome
    if isinstance(outcome, Failure):
        st.error(outcome.reason)
    elif isinstance(outcome, Success):
        result = ImageAsset.from_data_uri(outcome.payload)
        st.image(result.data, caption="Edited", width="stretch")
        st.download_button(
            "Download",
            data=result.data,
            file_name=result.suggested_filename(),
            mime=result.mime_type,
        )
    else:
        st.info("Your edited image will appear here.")
