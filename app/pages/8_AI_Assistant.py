from __future__ import annotations

# Phase A: AI Assistant goal
# - Chat about business metrics; each message is forwarded to the chat API.
# - Upstream failures are shown inline, the conversation keeps going.

import bootstrap

bootstrap.add_src_to_path()

import streamlit as st

from bizmetrics.chat.client import PerplexityClient
from bizmetrics.config.env import get_chat_config
from bizmetrics.errors import ChatUpstreamError

st.set_page_config(page_title="Business Metrics Console", layout="wide")

HISTORY_KEY = "chat_history"
GREETING = (
    "Hello! I'm your business metrics assistant. Ask me about revenue, costs, "
    "margins or any of the scenarios you are modelling."
)


@st.cache_resource
def get_client() -> PerplexityClient:
    return PerplexityClient(get_chat_config())


def render_message(msg: dict) -> None:
    with st.chat_message(msg["role"]):
        st.markdown(msg["content"])
        if msg.get("citations"):
            st.caption("Sources")
            for i, url in enumerate(msg["citations"], start=1):
                st.markdown(f"{i}. [{url}]({url})")


def main() -> None:
    st.title("AI Assistant")

    if HISTORY_KEY not in st.session_state:
        st.session_state[HISTORY_KEY] = [{"role": "assistant", "content": GREETING}]

    if not get_client().config.api_key:
        st.warning("PERPLEXITY_API_KEY is not set; messages will fail until it is configured.")

    if st.button("Clear conversation"):
        st.session_state[HISTORY_KEY] = [{"role": "assistant", "content": GREETING}]
        st.rerun()

    # Phase B: History
    for msg in st.session_state[HISTORY_KEY]:
        render_message(msg)

    # Phase C: New message -> upstream
    prompt = st.chat_input("Ask about your metrics")
    if not prompt or not prompt.strip():
        return

    user_msg = {"role": "user", "content": prompt}
    st.session_state[HISTORY_KEY].append(user_msg)
    render_message(user_msg)

    with st.spinner("Thinking..."):
        try:
            reply = get_client().ask(prompt)
        except ChatUpstreamError as exc:
            answer = {
                "role": "assistant",
                "content": f"Sorry, I couldn't process that request ({exc}).",
            }
        else:
            answer = {
                "role": "assistant",
                "content": reply.response,
                "citations": reply.citations,
            }

    st.session_state[HISTORY_KEY].append(answer)
    render_message(answer)


if __name__ == "__main__":
    main()
