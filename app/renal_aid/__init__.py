"""Core logic for the NHS Renal Decision Aid, kept free of Streamlit imports."""

__version__ = "0.1.0"
