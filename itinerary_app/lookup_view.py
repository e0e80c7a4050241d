import io

import pandas as pd
import streamlit as st

from itinerary.load import load_airport_lookup


@st.cache_data
def load_lookup(lookup_bytes: bytes) -> dict:
    """Builds the airport lookup from an uploaded CSV, cached per file content."""
    return dict(load_airport_lookup(io.BytesIO(lookup_bytes)))


def lookup_frame(lookup: dict) -> pd.DataFrame:
    """Lookup as a table of code/airport pairs for display."""
    return pd.DataFrame(sorted(lookup.items()), columns=["code", "airport"])
