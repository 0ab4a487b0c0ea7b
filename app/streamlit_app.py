"""
Streamlit App — Field Name Translator

Run from the project root:
    streamlit run app/streamlit_app.py
"""

import logging
import sys
from pathlib import Path
from typing import List

# ── Make the project root importable ─────────────────────────────────────────
_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(_ROOT))

import streamlit as st

from src.naming.converter import LowercaseHandling, is_decision_sentinel
from src.pipeline import FieldTranslationFacade, NamingVariant, load_facade_from_config
from src.translation.errors import TranslationError
from src.translation.schema import ProviderName

# ── Page config (first Streamlit call) ──────────────────────
st.set_page_config(
    page_title="Field Name Translator",
    page_icon="🏷️",
    layout="centered",
    initial_sidebar_state="expanded",
)

# ── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)

_PROVIDER_LABELS = {
    ProviderName.MYMEMORY: "MyMemory (free, no key)",
    ProviderName.LIBRE:    "LibreTranslate (public instances)",
    ProviderName.BAIDU:    "Baidu Fanyi (App ID + key)",
}

_LOWERCASE_LABELS = {
    "keep":  "Keep as-is",
    "split": "Guess word boundaries",
    "ask":   "Ask me",
}


# =============================================================================
# ── Facade loader ─────────────────────────────────────────────────────────────
# =============================================================================

@st.cache_resource(show_spinner=False)
def _load_facade() -> FieldTranslationFacade:
    """Build the facade once per server process."""
    return load_facade_from_config()


# =============================================================================
# ── Sidebar ───────────────────────────────────────────────────────────────────
# =============================================================================

def _render_sidebar(facade: FieldTranslationFacade) -> str:
    """Render provider settings. Returns the lowercase-handling choice."""
    with st.sidebar:
        st.markdown("### ⚙️ Translation providers")
        st.caption("Tried top to bottom; the offline dictionary is used when all fail.")

        for name, label in _PROVIDER_LABELS.items():
            current = facade.config.get(name).enabled
            checked = st.checkbox(label, value=current, key=f"provider_{name.value}")
            if checked != current:
                facade.toggle_provider(name, checked)

        if facade.config.get(ProviderName.BAIDU).enabled:
            creds = facade.config.get(ProviderName.BAIDU).credentials
            with st.form("baidu_credentials"):
                app_id = st.text_input("App ID", value=creds.app_id if creds else "")
                secret_key = st.text_input(
                    "Secret Key",
                    value=creds.secret_key if creds else "",
                    type="password",
                )
                if st.form_submit_button("Save Baidu credentials"):
                    try:
                        facade.save_baidu_credentials(app_id, secret_key)
                        st.success("Baidu credentials saved.")
                    except TranslationError as exc:
                        st.warning(str(exc))

        st.markdown("---")
        st.markdown("### 🔡 snake_case for lowercase input")
        choice = st.radio(
            "Single all-lowercase words",
            options=list(_LOWERCASE_LABELS.keys()),
            format_func=lambda x: _LOWERCASE_LABELS[x],
            index=0,
            label_visibility="collapsed",
        )

    return choice


# =============================================================================
# ── Result renderers ──────────────────────────────────────────────────────────
# =============================================================================

def _render_variants(variants: List[NamingVariant], handle_lowercase: str) -> None:
    for variant in variants:
        if is_decision_sentinel(variant.value):
            st.info(
                "This is a single lowercase word, so its word boundaries are unknown. "
                "Pick *Keep as-is* or *Guess word boundaries* in the sidebar.",
                icon="❓",
            )
            continue
        st.text_input(variant.label, value=variant.value, disabled=True)

    if handle_lowercase == LowercaseHandling.SPLIT.value:
        st.caption("Guessed word boundaries are heuristic. Check them before use.")


# =============================================================================
# ── Main ──────────────────────────────────────────────────────────────────────
# =============================================================================

def main() -> None:
    facade = _load_facade()
    handle_lowercase = _render_sidebar(facade)

    st.title("🏷️ Field Name Translator")
    st.caption("Translate field names between Chinese and English and get identifier spellings.")

    text: str = st.text_input(
        "Field name",
        key="field_text",
        placeholder="用户名  ·  user name  ·  createTime",
    )

    col_en, col_zh, col_variants = st.columns(3)
    with col_en:
        to_en = st.button("→ English", use_container_width=True)
    with col_zh:
        to_zh = st.button("→ 中文", use_container_width=True)
    with col_variants:
        suggest = st.button("Suggest variants", type="primary", use_container_width=True)

    if not (to_en or to_zh or suggest):
        return

    try:
        with st.spinner("Translating…"):
            if suggest:
                variants = facade.suggest_naming_variants(text, handle_lowercase)
                _render_variants(variants, handle_lowercase)
            else:
                result = facade.translate_with_provenance(
                    text, "zh" if to_en else "en", "en" if to_en else "zh"
                )
                st.text_input("Translation", value=result.translated, disabled=True)
                if result.degraded:
                    st.caption("No online provider answered; this is an offline dictionary guess.")
                else:
                    st.caption(f"Translated by {result.provider.value}.")
    except ValueError as exc:
        st.warning(str(exc), icon="⚠️")
    except TranslationError as exc:
        st.error(f"Translation failed: {exc}", icon="🚨")
        logger.exception("Field translation failed")


if __name__ == "__main__":
    main()
