"""Streamlit front end for the Synthetic Data Generator."""
