import streamlit as st

from itinerary.errors import AirportLookupError
from itinerary.transform import process_text
from itinerary_app.lookup_view import load_lookup, lookup_frame

# --- Page Configuration ---
st.set_page_config(
    page_title="Itinerary Prettifier",
    page_icon="✈️",
    layout="wide",
    initial_sidebar_state="expanded",
)

# --- Sidebar Uploads ---
st.sidebar.title("Inputs")
lookup_file = st.sidebar.file_uploader("Airport lookup (.csv)", type=["csv"])
itinerary_file = st.sidebar.file_uploader("Raw itinerary (.txt)", type=["txt"])

# --- Main App ---
st.title("✈️ Itinerary Prettifier")
st.markdown("Replaces `#IATA` / `##ICAO` codes with airport names and formats `D(...)`, `T12(...)` and `T24(...)` tokens.")

if lookup_file is None or itinerary_file is None:
    st.info("Upload an airport lookup and a raw itinerary to get started.")
    st.stop()

try:
    airport_lookup = load_lookup(lookup_file.getvalue())
except AirportLookupError as e:
    st.error(str(e))
    st.stop()

raw_text = itinerary_file.getvalue().decode("utf-8", errors="replace")
pretty_text = process_text(raw_text, airport_lookup)

st.metric(label="Lookup codes loaded", value=len(airport_lookup))

col1, col2 = st.columns(2)
with col1:
    st.subheader("Raw Itinerary")
    st.text(raw_text)
with col2:
    st.subheader("Prettified Itinerary")
    st.text(pretty_text)

st.download_button(
    "Download itinerary",
    data=pretty_text.encode("utf-8"),
    file_name="output.txt",
    mime="text/plain",
)

with st.expander("Airport lookup"):
    st.dataframe(lookup_frame(airport_lookup))
