import pandas as pd
import requests
import streamlit as st
from st_aggrid import AgGrid, GridOptionsBuilder, GridUpdateMode, JsCode
from streamlit_lottie import st_lottie

LOTTIE_EMPTY_URL = "https://assets5.lottiefiles.com/packages/lf20_a1xjeug1.json"
LOTTIE_LOADING_URL = "https://assets2.lottiefiles.com/packages/lf20_usmfx6bp.json"

def setup_style():
    st.markdown("""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Manrope:wght@400;600;700;800&family=Space+Grotesk:wght@500;700&display=swap');

        :root {
            --bg: #0A0A0A;
            --panel: rgba(255, 255, 255, 0.04);
            --panel-strong: rgba(255, 255, 255, 0.08);
            --border: rgba(255, 255, 255, 0.12);
            --text-main: #F5F5F5;
            --text-soft: rgba(245, 245, 245, 0.64);
            --accent: #FF3D00;
            --accent-2: #FFB300;
            --ease-fluid: cubic-bezier(0.22, 1, 0.36, 1);
        }

        html, body, .stApp {
            font-family: 'Manrope', sans-serif;
            color: var(--text-main);
            background:
                radial-gradient(48rem 24rem at 12% -8%, rgba(255, 61, 0, 0.16), transparent 65%),
                radial-gradient(42rem 22rem at 92% 0%, rgba(255, 179, 0, 0.10), transparent 62%),
                var(--bg);
            background-attachment: fixed;
        }

        h1, h2, h3 {
            font-family: 'Space Grotesk', 'Manrope', sans-serif !important;
            letter-spacing: -0.02em;
        }

        [data-testid="stSidebar"] { display: none; }
        [data-testid="collapsedControl"] { display: none; }

        .nl-brand {
            font-family: 'Space Grotesk', sans-serif;
            font-weight: 700;
            font-size: 1.35rem;
            letter-spacing: 0.08em;
            background: linear-gradient(90deg, var(--accent), var(--accent-2));
            -webkit-background-clip: text;
            -webkit-text-fill-color: transparent;
        }

        .nl-hero {
            padding: 3.5rem 0 2rem 0;
        }
        .nl-hero h1 {
            font-size: 3.2rem !important;
            line-height: 1.05;
        }
        .nl-hero p {
            color: var(--text-soft);
            font-size: 1.15rem;
            max-width: 42rem;
        }

        .nl-card {
            background: var(--panel);
            border: 1px solid var(--border);
            border-radius: 18px;
            padding: 1.4rem 1.3rem;
            height: 100%;
            transition: transform 240ms var(--ease-fluid), border-color 240ms var(--ease-fluid);
        }
        .nl-card:hover {
            transform: translateY(-3px);
            border-color: rgba(255, 61, 0, 0.45);
        }
        .nl-card.featured {
            background: var(--panel-strong);
            border-color: rgba(255, 61, 0, 0.6);
        }
        .nl-card .nl-icon { font-size: 1.8rem; }
        .nl-card .nl-title { font-weight: 700; font-size: 1.1rem; margin: 0.4rem 0; }
        .nl-card .nl-sub { color: var(--text-soft); font-size: 0.95rem; }
        .nl-card .nl-price { font-family: 'Space Grotesk', sans-serif; font-size: 2rem; font-weight: 700; }
        .nl-card ul { padding-left: 1.1rem; color: var(--text-soft); }

        .nl-footer {
            border-top: 1px solid var(--border);
            margin-top: 3rem;
            padding-top: 1rem;
            color: var(--text-soft);
            font-size: 0.85rem;
        }

        .nl-loading {
            position: fixed;
            inset: 0;
            z-index: 9999;
            display: flex;
            align-items: center;
            justify-content: center;
            background: var(--bg);
        }
        .nl-loading-orb {
            width: 56px;
            height: 56px;
            border-radius: 50%;
            border: 3px solid rgba(255, 255, 255, 0.1);
            border-top-color: var(--accent);
            animation: nl-spin 900ms linear infinite;
        }
        @keyframes nl-spin { to { transform: rotate(360deg); } }

        .stButton > button {
            border-radius: 999px !important;
            border: 1px solid var(--border) !important;
            transition: border-color 200ms var(--ease-fluid), background 200ms var(--ease-fluid);
        }
        .stButton > button[kind="primary"] {
            background: linear-gradient(90deg, var(--accent), #FF6D00) !important;
            border: none !important;
            color: #fff !important;
        }

        div[data-testid="stMetric"] {
            background: var(--panel);
            border: 1px solid var(--border);
            border-radius: 16px;
            padding: 0.9rem 1rem;
        }

        [data-testid="stAlert"] {
            border-radius: 14px !important;
        }
    </style>
    """, unsafe_allow_html=True)

def show_loading_screen(message="Loading..."):
    st.markdown(
        f"""
        <div class="nl-loading">
          <div style="text-align:center;">
            <div class="nl-loading-orb" style="margin: 0 auto 1rem auto;"></div>
            <div style="color: var(--text-soft);">{message}</div>
          </div>
        </div>
        """,
        unsafe_allow_html=True
    )

def card(icon, title, subtitle, featured=False):
    css_class = "nl-card featured" if featured else "nl-card"
    st.markdown(
        f"""
        <div class="{css_class}">
          <div class="nl-icon">{icon}</div>
          <div class="nl-title">{title}</div>
          <div class="nl-sub">{subtitle}</div>
        </div>
        """,
        unsafe_allow_html=True
    )

def update_chart_layout(fig):
    fig.update_layout(
        template="plotly_dark",
        font=dict(family="Manrope, sans-serif", size=13, color="#F5F5F5"),
        margin=dict(l=20, r=20, t=50, b=20),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(255,255,255,0.03)",
        hovermode="x unified",
        xaxis=dict(
            showgrid=False,
            zeroline=False,
            showline=True,
            linecolor="rgba(255,255,255,0.2)"
        ),
        yaxis=dict(
            showgrid=True,
            gridcolor="rgba(255,255,255,0.08)",
            zeroline=False
        ),
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="right",
            x=1
        )
    )
    return fig

def render_aggrid(df, height=400, pagination=False, selectable=False, theme="balham"):
    """Dark AgGrid table. With selectable=True returns the selected rows as a DataFrame."""
    if df.empty:
        st.info("Nothing to show yet")
        return None

    gb = GridOptionsBuilder.from_dataframe(df)

    gb.configure_default_column(filterable=True, sortable=True, resizable=True, wrapText=True, autoHeight=True)

    for col in df.columns:
        is_num = pd.api.types.is_numeric_dtype(df[col])
        flex_val = 1 if is_num else 3
        min_w = 80 if is_num else 150
        max_w = {"maxWidth": 120} if is_num else {}

        col_kwargs = {"minWidth": min_w, "flex": flex_val, **max_w}

        if is_num:
            jscode_str = """function(params) {
                if (params.value == null || params.value === 'nan' || params.value === 'NaN') return '';
                const val = Number(params.value);
                if (isNaN(val)) return params.value;
                return val.toLocaleString('en-US', {minimumFractionDigits: 0, maximumFractionDigits: 2});
            }"""
            gb.configure_column(col, valueFormatter=JsCode(jscode_str), **col_kwargs)
        else:
            gb.configure_column(col, **col_kwargs)

    if pagination:
        gb.configure_pagination(paginationAutoPageSize=False, paginationPageSize=25)
    if selectable:
        gb.configure_selection(selection_mode="single", use_checkbox=False)

    gb.configure_grid_options(wrapHeaderText=True, autoHeaderHeight=True)
    gridOptions = gb.build()

    valid_themes = ["streamlit", "alpine", "balham", "material"]
    safe_theme = theme if theme in valid_themes else "balham"

    response = AgGrid(
        df,
        gridOptions=gridOptions,
        height=height,
        theme=safe_theme,
        custom_css={
            ".ag-theme-alpine, .ag-theme-balham": {
                "--ag-background-color": "#111111",
                "--ag-foreground-color": "#F5F5F5",
                "--ag-header-background-color": "#1A1A1A",
                "--ag-header-foreground-color": "#F5F5F5",
                "--ag-odd-row-background-color": "#141414",
                "--ag-row-hover-color": "rgba(255, 61, 0, 0.18)",
                "--ag-row-border-color": "rgba(255, 255, 255, 0.06)",
                "--ag-border-color": "rgba(255, 255, 255, 0.12)",
                "--ag-selected-row-background-color": "rgba(255, 61, 0, 0.28)",
            },
            ".ag-root-wrapper": {
                "border-radius": "14px",
                "overflow": "hidden",
                "border": "1px solid rgba(255, 255, 255, 0.12)",
            },
            ".ag-header-cell-label": {"color": "#F5F5F5 !important", "font-weight": "600"},
        },
        update_mode=GridUpdateMode.SELECTION_CHANGED if selectable else GridUpdateMode.NO_UPDATE,
        allow_unsafe_jscode=True
    )
    if not selectable:
        return None
    selected = response.selected_rows
    if selected is None:
        return pd.DataFrame()
    return pd.DataFrame(selected)

@st.cache_data(show_spinner=False)
def load_lottieurl(url: str):
    try:
        r = requests.get(url, timeout=5)
    except requests.RequestException:
        return None
    if r.status_code == 200:
        return r.json()
    return None

def render_empty_state(title, subtitle="", key="empty_state"):
    lottie_empty = load_lottieurl(LOTTIE_EMPTY_URL)
    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        if lottie_empty:
            st_lottie(lottie_empty, height=220, key=key)
        st.markdown(
            f"<h3 style='text-align: center; color: var(--text-soft);'>{title}</h3>"
            f"<p style='text-align: center; color: rgba(255,255,255,0.4);'>{subtitle}</p>",
            unsafe_allow_html=True
        )
