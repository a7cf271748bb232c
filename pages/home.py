import streamlit as st

app_settings = st.session_state.get("app_settings", {})
app_name = app_settings.get("app_name", "TableSnap Studio")
pages = app_settings.get("pages_list", [])

st.title(f"🧪 {app_name}")

st.markdown(
    """
## Welcome to TableSnap Studio

Turn photos of tables into CSV and edit images with plain-language instructions.

### Available Features:
"""
)

for page_info in pages:
    st.write(f"**{page_info['icon']} {page_info['title']}**")
    st.write(f"*{page_info['description']}*")
    st.write("---")

st.subheader("🚀 Quick Actions")

if pages:
    cols = st.columns(len(pages))
    for col, page_info in zip(cols, pages):
        label = f"{page_info['icon']} Go to {page_info['title']}"
        with col:
            if st.button(label, width="stretch"):
                st.switch_page(page_info["path"])
