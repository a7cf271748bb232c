from pathlib import Path

import streamlit as st

from tablesnap.app_context import get_settings
from tablesnap.config import load_environment, validate_settings
from tablesnap.logging_config import logger

BASE_DIR = Path(__file__).resolve().parent

load_environment(BASE_DIR / ".env")

# Configuration
st.set_page_config(
    page_title="TableSnap Studio",
    page_icon="🧪",
    layout="wide",
)

FEATURE_PAGES = [
    {
        "id": "csv_extractor",
        "path": "pages/1_CSV_Extractor.py",
        "title": "Image to CSV",
        "description": "Extract tables from a photo or screenshot as CSV text",
        "icon": "📋",
    },
    {
        "id": "image_editor",
        "path": "pages/2_Image_Editor.py",
        "title": "Magic Editor",
        "description": "Edit an image with a natural-language instruction",
        "icon": "🪄",
    },
]

NAV_PAGES = [
    {
        "id": "home",
        "path": "pages/home.py",
        "title": "Home",
        "description": "Overview and quick actions",
        "icon": "🏠",
    },
    *FEATURE_PAGES,
    {
        "id": "system_info",
        "path": "pages/system_info.py",
        "title": "System Info",
        "description": "Configuration diagnostics",
        "icon": "🔧",
    },
]


@st.cache_resource
def get_app_settings() -> dict:
    """Cache application settings."""
    settings = get_settings()
    pages_by_id = {
        page["id"]: {
            "title": page["title"],
            "description": page["description"],
            "path": page["path"],
            "icon": page["icon"],
        }
        for page in FEATURE_PAGES
    }
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "pages": pages_by_id,
        "pages_list": list(pages_by_id.values()),
    }


def _init_session_state() -> None:
    if "app_settings" not in st.session_state:
        st.session_state.app_settings = get_app_settings()


def _build_navigation_pages() -> list[st.Page]:
    return [
        st.Page(page["path"], title=page["title"], icon=page["icon"])
        for page in NAV_PAGES
    ]


def validate_environment() -> list[str]:
    """Validate that the application environment is properly set up."""
    issues = validate_settings(get_settings())

    for page_info in NAV_PAGES:
        page_path = BASE_DIR / page_info["path"]
        if not page_path.exists():
            issues.append(f"Missing page file: {page_info['path']}")

    if issues:
        for issue in issues:
            logger.warning("Environment issue: %s", issue)
    else:
        logger.info("Environment validation passed.")

    return issues


def main() -> None:
    """Main application function with Streamlit navigation."""
    _init_session_state()
    app_settings = st.session_state.app_settings

    logger.info("Starting app: %s v%s", app_settings["app_name"], app_settings["version"])

    issues = validate_environment()
    if issues:
        logger.error("Environment issues detected: %s", issues)
        st.error("⚠️ Configuration issues detected:")
        for issue in issues:
            st.write(f"- {issue}")
        st.warning("Requests will fail until the configuration is fixed.")

    nav_pages = _build_navigation_pages()
    if not nav_pages:
        st.sidebar.error("No pages registered for navigation.")
        return
    nav = st.navigation(nav_pages, position="sidebar", expanded=True)
    nav.run()


if __name__ == "__main__":
    main()
