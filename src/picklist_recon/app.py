#!/usr/bin/env python
"""
Streamlit Web UI for the pick-list extraction pipeline.

Run with:
    streamlit run src/picklist_recon/app.py

Features:
- Upload a pick-list photo or paste captured OCR text
- Raw OCR preview
- Parsed rows as a table and JSON, or the analysis report on failure
- Download of results
"""

import sys
from pathlib import Path

# Add src directory to path for imports when running as script
_src_dir = Path(__file__).parent.parent
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

import streamlit as st

from picklist_recon import __version__
from picklist_recon.config import get_config
from picklist_recon.utils.assembler import PicklistAssembler
from picklist_recon.utils.export import NO_TABLE_MARKER, rows_to_records
from picklist_recon.utils.io import decode_image


# Page config must be first Streamlit command
st.set_page_config(
    page_title="Pick-list Reconstruction",
    page_icon="📦",
    layout="wide",
    initial_sidebar_state="expanded"
)


def init_session_state():
    """Initialize session state variables."""
    if "result" not in st.session_state:
        st.session_state.result = None


@st.cache_data(ttl=300)  # Cache for 5 minutes
def check_engine_availability():
    """Check which OCR engines are available."""
    engines = {}

    try:
        import pytesseract
        pytesseract.get_tesseract_version()
        engines["tesseract"] = {"available": True, "error": None}
    except Exception as e:
        engines["tesseract"] = {"available": False, "error": str(e)[:50]}

    try:
        import easyocr
        engines["easyocr"] = {"available": True, "error": None}
    except ImportError:
        engines["easyocr"] = {"available": False, "error": "pip install easyocr"}

    return engines


def render_sidebar():
    """Render sidebar with settings."""
    st.sidebar.header("⚙️ Settings")

    engines = check_engine_availability()

    ocr_options = {
        "Tesseract OCR": "tesseract",
        "EasyOCR": "easyocr",
    }
    ocr_display = st.sidebar.selectbox(
        "OCR Engine",
        list(ocr_options.keys()),
        index=0,
        help="Engine used to read the photo"
    )
    ocr_engine = ocr_options[ocr_display]

    if not engines[ocr_engine]["available"]:
        st.sidebar.warning(f"{ocr_display} unavailable: {engines[ocr_engine]['error']}")

    language = st.sidebar.text_input("Language", value="eng")

    save_logs = st.sidebar.checkbox(
        "Save log files",
        value=False,
        help="Write raw OCR text, JSON and reports to the output directory"
    )

    st.sidebar.caption(f"v{__version__}")

    return {
        "ocr_engine": ocr_engine,
        "language": language,
        "save_logs": save_logs,
    }


def build_assembler(settings) -> PicklistAssembler:
    config = get_config()
    config.ocr.engine = settings["ocr_engine"]
    config.ocr.language = settings["language"]
    config.output.save_logs = settings["save_logs"]
    return PicklistAssembler.from_config(config)


def render_result(result):
    """Render an extraction result."""
    if result.error is not None:
        st.error(result.error)
        return

    with st.expander("Raw OCR output", expanded=not result.rows):
        st.code(result.raw_text or "(empty)", language=None)

    if result.rows:
        st.success(f"Parsed {len(result.rows)} row(s)")
        st.dataframe(rows_to_records(result.rows))
        json_output = result.to_json()
        st.code(json_output, language="json")
        st.download_button(
            "Download JSON",
            data=json_output,
            file_name=f"parsed_data_{result.timestamp}.json",
            mime="application/json"
        )
    else:
        st.warning(NO_TABLE_MARKER)
        st.text(result.report)
        st.download_button(
            "Download analysis report",
            data=result.report,
            file_name=f"analysis_report_{result.timestamp}.txt",
            mime="text/plain"
        )

    for path in result.saved_paths:
        st.caption(f"Saved: {path}")


def main():
    init_session_state()
    settings = render_sidebar()

    st.title("📦 Pick-list Reconstruction")
    st.caption("Photo of a printed pick-list → structured rows")

    photo_tab, text_tab = st.tabs(["Photo", "OCR text"])

    with photo_tab:
        uploaded_file = st.file_uploader(
            "Pick-list photo",
            type=["png", "jpg", "jpeg", "tif", "tiff", "bmp", "webp"]
        )
        if uploaded_file is not None and st.button("Extract table", type="primary"):
            with st.spinner("Running OCR..."):
                try:
                    image = decode_image(uploaded_file.getvalue())
                except ValueError as e:
                    st.session_state.result = None
                    st.error(f"Error loading image: {e}")
                else:
                    st.session_state.result = build_assembler(settings).process_array(image)

    with text_tab:
        raw_text = st.text_area("Captured OCR text", height=240)
        if st.button("Reconstruct table"):
            st.session_state.result = build_assembler(settings).process_text(raw_text)

    if st.session_state.result is not None:
        st.divider()
        render_result(st.session_state.result)


main()
