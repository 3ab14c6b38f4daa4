import logging

import streamlit as st

from taxsheet import config
from taxsheet.errors import InvalidUpload, MissingColumn, UnreadableFormat
from taxsheet.pipeline import accept_upload, build_upload_view, save
from taxsheet.render import display_value, preview_frame
from taxsheet.store import SessionStore

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("taxsheet.app")

st.set_page_config(page_title="Tax Sheet Editor", layout="wide")
st.title("🧾 Tax Sheet Editor")

store = SessionStore(st.session_state)

# --- File Upload Section (Sidebar) ---
with st.sidebar:
    st.header("Upload Excel File")
    uploaded_file = st.file_uploader("Upload an Excel file", type=["xlsx"])
    st.markdown("---")
    st.caption(
        f"Columns {config.SOURCE_COLUMN_A} and {config.SOURCE_COLUMN_B} are added into "
        f"'{config.DERIVED_COLUMN_LABEL}', and column {config.SOURCE_COLUMN_A} is totalled."
    )


# --- Utility Functions (Cached) ---
@st.cache_data(ttl=3600)
def load_upload_view(data, file_name):
    """Decodes the canonical bytes and adds the derived column and totals row."""
    return build_upload_view(data, file_name)


def seed_fields(surface):
    """Pre-fills the form widgets with the freshly rendered values of a new upload."""
    # Forget the fields of the previous upload, their addresses mean nothing now
    for key in list(st.session_state.keys()):
        if str(key).startswith((config.CELL_FIELD_PREFIX, config.READONLY_FIELD_PREFIX)):
            del st.session_state[key]
    for name, value in surface.initial_values().items():
        st.session_state[name] = value
    st.session_state.pop("saved_file", None)


def posted_fields(surface):
    """Collects the form the way it would be posted: cell fields plus fileName."""
    posted = {f.name: st.session_state.get(f.name, f.value) for f in surface.editable_fields()}
    posted[config.FILE_NAME_FIELD] = st.session_state.get(config.FILE_NAME_FIELD, surface.file_name)
    return posted


# --- Main App Logic ---
try:
    # A new file in the uploader replaces whatever this session held before
    if uploaded_file is not None and st.session_state.get("last_processed_file_id") != uploaded_file.file_id:
        st.session_state.last_processed_file_id = uploaded_file.file_id
        with st.spinner("Loading Excel file..."):
            accept_upload(store, uploaded_file.getvalue(), uploaded_file.name)
            view = load_upload_view(store.get(), store.get_file_name())
        seed_fields(view.surface)
        st.success("File loaded successfully!")

    if store.has_upload():
        view = load_upload_view(store.get(), store.get_file_name())
        surface = view.surface

        st.info(f"Worksheet: {surface.sheet_name}")
        st.metric(f"Total of column {config.SOURCE_COLUMN_A}", display_value(view.total))

        # --- Display and Editing UI ---
        st.subheader("✏️ Edit Table")
        st.caption(f"'{config.DERIVED_COLUMN_LABEL}' is recalculated when you save and can't be edited here.")

        # Fields missing from session state (e.g. after a reload) start from the rendered values
        for name, value in surface.initial_values().items():
            if name not in st.session_state:
                st.session_state[name] = value

        with st.form("edit_table_form"):
            for box, title in zip(st.columns(len(surface.headers)), surface.headers):
                box.markdown(f"**{title}**" if title else "&nbsp;")

            for row in surface.rows:
                for box, f in zip(st.columns(len(row)), row):
                    label = f"{surface.headers[f.col - 1] or 'Column'} (row {f.row})"
                    if f.editable:
                        # Value comes from session state
                        box.text_input(label, key=f.key, label_visibility="collapsed")
                    else:
                        box.text_input(label, value=f.value, key=f.key, disabled=True, label_visibility="collapsed")

            st.text_input("Save as", key=config.FILE_NAME_FIELD)
            submitted = st.form_submit_button("Save changes")

        if submitted:
            try:
                st.session_state["saved_file"] = save(store, posted_fields(surface))
                st.success("Changes saved. Download the file below.")
            except InvalidUpload as e:
                st.warning(str(e))

        with st.expander("Preview of the calculated table"):
            st.dataframe(preview_frame(view.grid), use_container_width=True)

        saved = st.session_state.get("saved_file")
        if saved is not None:
            st.subheader("📥 Download Modified Table")
            st.dataframe(preview_frame(saved.grid), use_container_width=True)
            st.download_button(
                "Download as Excel",
                data=saved.data,
                file_name=saved.file_name,
                mime=saved.content_type,
            )
    else:
        st.info("Please upload an Excel file to begin.")

except InvalidUpload as e:
    st.warning(str(e))
except (UnreadableFormat, MissingColumn) as e:
    logger.warning("Could not process upload: %s", e)
    store.clear()
    st.error(str(e))
    st.info("Please ensure it's a valid Excel file with readable content and try again.")
except Exception as e:
    logger.exception("Unexpected error while processing the Excel file")
    st.error(f"An unexpected error occurred while processing the Excel file: {e}")
    st.exception(e)  # Display full traceback for debugging
