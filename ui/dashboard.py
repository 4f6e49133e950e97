# ui/dashboard.py
import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import streamlit as st
import requests
import pandas as pd
from ui.api_client import ScreeningClient, ScreeningAPIError
# -------------------- CONFIG --------------------
API_URL = os.getenv("API_URL", "http://localhost:3000")
st.set_page_config(page_title="AI Screening Console", page_icon="🎙️", layout="wide")
st.title("🤖 AI Screening Console")

st.markdown(
    "Create screening interviews from a job description, run the interview as a candidate, "
    "and inspect recently created screenings."
)

# -------------------- SESSION STATE --------------------
if "api_url" not in st.session_state:
    st.session_state.api_url = API_URL

# Conversation history is kept client-side; the API is stateless per turn
if "messages" not in st.session_state:
    st.session_state.messages = []

if "active_screening" not in st.session_state:
    st.session_state.active_screening = None

client = ScreeningClient(st.session_state.api_url)

# -------------------- TABS --------------------
tab1, tab2, tab3 = st.tabs(["🧾 Create Screening", "💬 Interview", "🐞 Recent Screenings"])

# ==================== TAB 1: Create Screening ====================
with tab1:
    st.subheader("Create Screening")

    with st.form("screening_form"):
        screening_id = st.text_input("Screening ID")
        title = st.text_input("Job Title")
        company = st.text_input("Company Name")
        jd_text = st.text_area("Job Description", height=200)
        submitted = st.form_submit_button("Create Screening")

    if submitted:
        with st.spinner("Creating screening..."):
            try:
                client.create_screening(screening_id.strip(), title.strip(), company.strip(), jd_text.strip())
            except ScreeningAPIError as e:
                st.error(f"❌ Screening creation failed: {e.message}")
                st.stop()
            except requests.exceptions.RequestException as e:
                st.error(f"Connection error: {e}")
                st.stop()

        st.success(f"✅ Screening '{screening_id.strip()}' created!")
        try:
            prompt = client.get_prompt(screening_id.strip())
        except (ScreeningAPIError, requests.exceptions.RequestException) as e:
            st.error(f"❌ Could not load the generated prompt: {e}")
            st.stop()
        with st.expander("📜 View Generated Prompt"):
            st.write(prompt)

# ==================== TAB 2: Interview ====================
with tab2:
    st.subheader("Run an Interview")

    with st.form("start_form"):
        sid = st.text_input("Screening ID", value=st.session_state.active_screening or "")
        cand_name = st.text_input("Candidate Name")
        cand_email = st.text_input("Candidate Email")
        started = st.form_submit_button("Start Interview")

    if started:
        try:
            client.start(sid.strip(), cand_name.strip(), cand_email.strip())
        except ScreeningAPIError as e:
            st.error(f"❌ Could not start interview: {e.message}")
            st.stop()
        except requests.exceptions.RequestException as e:
            st.error(f"Connection error: {e}")
            st.stop()
        st.session_state.active_screening = sid.strip()
        st.session_state.messages = []

    if st.session_state.active_screening:
        st.caption(f"Screening: {st.session_state.active_screening}")
        for msg in st.session_state.messages:
            with st.chat_message(msg["role"]):
                st.markdown(msg["content"])

        answer = st.chat_input("Your answer")
        if answer:
            st.session_state.messages.append({"role": "user", "content": answer})
            with st.chat_message("user"):
                st.markdown(answer)
            with st.spinner("⏳ Waiting for the interviewer..."):
                try:
                    reply = client.respond(st.session_state.active_screening, st.session_state.messages)
                except (ScreeningAPIError, requests.exceptions.RequestException) as e:
                    # drop the unanswered turn so it can be retried
                    st.session_state.messages.pop()
                    st.error(f"❌ {e}")
                    st.stop()
            st.session_state.messages.append(reply)
            with st.chat_message(reply["role"]):
                st.markdown(reply["content"])
    else:
        st.warning("⚠️ Start an interview with a screening ID first.")

# ==================== TAB 3: Recent Screenings ====================
with tab3:
    st.subheader("Recently Created Screenings")
    limit = st.slider("Number of screenings", 1, 50, 20)

    if st.button("🔄 Refresh"):
        try:
            rows = client.list_recent(limit)
        except (ScreeningAPIError, requests.exceptions.RequestException) as e:
            st.error(f"❌ {e}")
            st.stop()

        if not rows:
            st.warning("No screenings found yet.")
        else:
            df = pd.DataFrame(rows)
            st.dataframe(df.drop(columns=["prompt"]), use_container_width=True)
            for row in rows:
                with st.expander(f"🧾 {row['id']} — {row.get('job_title') or 'custom prompt'}"):
                    st.write(row["prompt"])
