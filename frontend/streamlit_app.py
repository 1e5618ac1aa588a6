"""A Streamlit web frontend for the AI Agent API."""

import streamlit as st
import requests

import api_client
from token_store import TokenStore

# --- Page Configuration ---
st.set_page_config(page_title="Smart AI Agent", page_icon="🤖", layout="wide")
token_store = TokenStore()


def get_tokens():
    """Gets the Google tokens, loading them from the token store on first use."""
    if "google_tokens" not in st.session_state:
        st.session_state.google_tokens = token_store.load()
    return st.session_state.google_tokens


def set_tokens(tokens):
    """Remembers new tokens for this session and across reloads."""
    if tokens:
        token_store.save(tokens)
    else:
        token_store.clear()
    st.session_state.google_tokens = tokens
    st.session_state.pop("google_account", None)


def handle_oauth_return():
    """Consumes the query parameters the OAuth callback redirects back with."""
    params = st.query_params
    if "error" in params:
        st.session_state.oauth_error = params["error"]
    elif params.get("success") == "true" and params.get("access_token"):
        set_tokens({"access_token": params["access_token"]})
        st.session_state.oauth_success = True
    elif "code" in params and not get_tokens():
        # The frontend was registered as the redirect URI and exchanges the code itself
        try:
            set_tokens(api_client.get_google_tokens(params["code"]))
            st.session_state.oauth_success = True
        except requests.exceptions.RequestException:
            st.session_state.oauth_error = "Failed to exchange authorization code for tokens"
    else:
        return
    # Keep tokens out of the address bar after reading them
    st.query_params.clear()


# --- Main App ---
st.title("🤖 Smart AI Agent")
st.caption("Ask anything. Connect your Google account to give the agent your context.")

# --- API Health Check ---
try:
    if api_client.get_status().get("status") != "ok":
        st.error("API is not healthy. Please start the backend server.", icon="🚨")
        st.stop()
except requests.exceptions.RequestException:
    st.error(
        "Could not connect to the API. Please ensure the backend server is running.",
        icon="🚨",
    )
    st.stop()

handle_oauth_return()

chat_tab, google_tab = st.tabs(["AI Chat", "Google Connect"])

# ==============================================================================
# === AI CHAT ==================================================================
# ==============================================================================
with chat_tab:
    tokens = get_tokens()
    if tokens:
        st.caption("Google account connected, answers use your profile and calendar.")

    with st.form("prompt_form"):
        prompt = st.text_area("Ask anything...", height=100)
        submitted = st.form_submit_button("Ask AI")

    if submitted:
        if not prompt.strip():
            st.warning("Please enter a prompt.")
        else:
            with st.spinner("🧠 Thinking..."):
                try:
                    if tokens and tokens.get("access_token"):
                        data = api_client.get_ai_agent_response(
                            prompt, tokens["access_token"], tokens.get("refresh_token")
                        )
                    else:
                        data = api_client.get_ai_response(prompt)
                    st.session_state.last_response = data
                except requests.exceptions.RequestException:
                    st.session_state.last_response = {
                        "result": "Error getting AI response.",
                        "status": "error",
                    }

    if "last_response" in st.session_state:
        data = st.session_state.last_response
        st.subheader("AI Response:")
        with st.container(border=True):
            st.markdown(data.get("result", ""))
        if data.get("status") == "fallback":
            st.caption("The AI provider could not be reached, your prompt was echoed back.")

# ==============================================================================
# === GOOGLE CONNECT ===========================================================
# ==============================================================================
with google_tab:
    st.header("Connect your Google Account")

    if st.session_state.pop("oauth_success", False):
        st.success("Successfully connected to Google! Your account is now linked.")
    if "oauth_error" in st.session_state:
        st.error(f"Google OAuth error: {st.session_state.pop('oauth_error')}")

    tokens = get_tokens()
    if not tokens:
        if st.button("Connect with Google", type="primary"):
            try:
                auth_url = api_client.get_google_auth_url()
                st.link_button("Continue to Google", auth_url)
            except requests.exceptions.RequestException:
                st.error("Failed to get Google Auth URL.")
    else:
        if "google_account" not in st.session_state:
            with st.spinner("Loading your Google account..."):
                try:
                    access, refresh = tokens["access_token"], tokens.get("refresh_token")
                    st.session_state.google_account = {
                        "user": api_client.get_google_user_info(access, refresh),
                        "events": api_client.get_google_calendar_events(access, refresh),
                        "messages": api_client.get_google_gmail_messages(access, refresh),
                    }
                except requests.exceptions.RequestException:
                    st.session_state.google_account = None
                    st.error("Failed to fetch user info or events.")

        account = st.session_state.get("google_account")
        if account:
            user = account["user"]
            st.subheader(f"Welcome, {user.get('name', '')}")
            st.write(f"Email: {user.get('email', 'N/A')}")
            st.write(f"Unread messages: {len(account['messages'])}")

            if account["events"]:
                st.subheader("Upcoming Calendar Events")
                for event in account["events"]:
                    start = event.get("start") or {}
                    when = start.get("dateTime") or start.get("date") or "No Date"
                    st.markdown(f"- {event.get('summary') or 'No Title'} ({when})")

        if st.button("Disconnect Google Account"):
            set_tokens(None)
            st.rerun()
