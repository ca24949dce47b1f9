import re
from pathlib import Path

import streamlit as st

from eztax_rag.config import find_config_path, get_kb_dir, load_config
from eztax_rag.pipelines import IngestionPipeline, get_retrieval_pipeline

MAX_FILE_SIZE_MB = 5
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024

PAGES = [
    "",
    "PersonalInfo",
    "Income",
    "Deductions",
    "TaxCredits",
    "RetirementContributions",
    "AdditionalTax",
    "Review",
]

st.set_page_config(page_title="EzTax RAG", page_icon="🧾")

st.title("🧾 EzTax - 세법 상담")

CONFIG_PATH = find_config_path()
CONFIG = load_config(CONFIG_PATH)


def sanitize_filename(filename: str) -> str:
    safe_name = Path(filename).name
    safe_name = re.sub(r"[^\w\-_.]", "_", safe_name)
    return safe_name


def validate_file(uploaded_file) -> tuple[bool, str]:
    if uploaded_file.size > MAX_FILE_SIZE_BYTES:
        return False, f"File exceeds maximum size of {MAX_FILE_SIZE_MB}MB"

    try:
        uploaded_file.getvalue().decode("utf-8")
    except UnicodeDecodeError:
        return False, "Not a UTF-8 text file"

    return True, ""


if "pipeline" not in st.session_state:
    with st.spinner("Loading retrieval pipeline..."):
        try:
            st.session_state.pipeline = get_retrieval_pipeline(CONFIG_PATH)
        except Exception as e:
            st.error(f"Failed to load pipeline: {e}")
            st.session_state.pipeline = None

tab_ask, tab_kb = st.tabs(["질문하기 / Ask", "지식 베이스 / Knowledge Base"])

with tab_ask:
    pipeline = st.session_state.pipeline

    if pipeline is None:
        st.warning("⚠️ Pipeline not loaded. Check configuration and API keys.")
    else:
        with st.sidebar:
            st.header("Settings")
            language = st.radio("Language", ["ko", "en"], horizontal=True)
            page = st.selectbox("Current page", PAGES)

        query = st.text_input("미국 세법에 관해 질문해 주세요 / Ask about U.S. tax law:")

        if query:
            with st.spinner("Searching and generating..."):
                result = pipeline.query(query, context=page, language=language)

            st.subheader("Answer:")
            st.write(result.answer)

            with st.expander("View retrieved context"):
                if not result.chunks:
                    st.write("No chunks above the similarity floor.")
                for i, chunk in enumerate(result.chunks):
                    st.write(
                        f"**{i + 1}. {chunk.source}** (similarity: {chunk.similarity:.4f})"
                    )
                    st.write(chunk.content[:500] + "...")
                    st.divider()

with tab_kb:
    st.header("Knowledge Base")

    kb_dir = get_kb_dir(CONFIG, CONFIG_PATH)
    documents = sorted(p.name for p in kb_dir.glob("*.txt")) if kb_dir.exists() else []
    st.write(f"{len(documents)} documents in `{kb_dir}`")
    for name in documents:
        st.write(f"- {name}")

    uploaded_files = st.file_uploader(
        "Upload text documents",
        type=["txt"],
        accept_multiple_files=True,
    )

    if uploaded_files:
        kb_dir.mkdir(parents=True, exist_ok=True)
        for uploaded_file in uploaded_files:
            is_valid, error_msg = validate_file(uploaded_file)
            if not is_valid:
                st.error(f"❌ {uploaded_file.name}: {error_msg}")
                continue

            safe_name = sanitize_filename(uploaded_file.name)
            with open(kb_dir / safe_name, "wb") as f:
                f.write(uploaded_file.getbuffer())
            st.success(f"✅ Saved {safe_name}")

    if st.button("Rebuild vector store"):
        with st.spinner("Embedding knowledge base..."):
            try:
                results = IngestionPipeline.from_config(CONFIG, CONFIG_PATH).build()
            except Exception as e:
                st.error(f"❌ Build failed: {e}")
            else:
                if st.session_state.pipeline is not None:
                    st.session_state.pipeline.cache.invalidate()
                st.success(
                    f"✅ Indexed {results['chunks']} chunks from "
                    f"{results['documents']} documents."
                )
