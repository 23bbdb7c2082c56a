# supabase_client/config.py
import os
from supabase import create_client, Client

def get_supabase_client() -> Client:
    """
    Return a fresh Supabase client if credentials are set.

    A new client is built per caller: the client carries the signed-in
    session, so it must not be shared between users of the Streamlit app.
    """
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_ANON_KEY")
    if not url or not key:
        raise RuntimeError("Supabase credentials not set in environment variables.")
    return create_client(url, key)
