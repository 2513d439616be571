"""Streamlit demo of the FAQ chatbot and navigation router."""
from __future__ import annotations

import streamlit as st

from application.use_cases.answer_question import ChatSession, answer_question
from application.use_cases.route_navigation import route_navigation
from infrastructure.config import build_default_container


@st.cache_resource
def get_container():
    return build_default_container()


container = get_container()
st.set_page_config(page_title="FAQ Chatbot Demo")
st.title("FAQ Chatbot Demo")

if "session" not in st.session_state:
    st.session_state.session = ChatSession()
    st.session_state.history = []

for role, text in st.session_state.history:
    st.chat_message(role).write(text)

question = st.chat_input("Ask about the school or say 'go to library'")
if question:
    st.chat_message("user").write(question)
    match = route_navigation(
        question,
        panoramas=container.panoramas,
        projects=container.projects,
        max_edit_distance=container.config.max_edit_distance,
    )
    if match is not None:
        reply = f"Opening {match.target.kind}: {match.target.label}"
        if match.target.url:
            reply += f" ({match.target.url})"
    else:
        result = answer_question(
            st.session_state.session.expand(question),
            corpus=container.corpus.snapshot(),
            embedder=container.embedder,
            rewriter=container.rewriter,
            cache=container.cache,
            gate=container.gate,
            validator=container.validator,
            weights=container.config.weights,
            limit=container.config.top_k,
        )
        reply = result.answer
        st.caption(f"via: {result.via}")
    st.chat_message("assistant").write(reply)
    st.session_state.history.extend([("user", question), ("assistant", reply)])
