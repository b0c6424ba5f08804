from __future__ import annotations


def get_app_css() -> str:
    return """
    <style>
    :root {
        --cf-navy: #1E293B;
        --cf-gold: #D4AF37;
        --cf-light-bg: #F8FAF7;
        --cf-card-bg: #FFFFFF;
        --cf-text: #1E293B;
        --cf-muted: #94A3B8;
        --cf-border: #E5E7EB;
        --cf-shadow: 0 8px 20px rgba(15, 23, 42, 0.06);
    }

    .stApp {
        background: var(--cf-light-bg);
        color: var(--cf-text);
    }

    #MainMenu,
    footer {
        visibility: hidden;
        height: 0;
    }

    .block-container {
        max-width: 1180px;
        padding-top: 1.1rem;
        padding-bottom: 1.4rem;
    }

    .cf-header {
        background: var(--cf-navy);
        border-bottom: 4px solid var(--cf-gold);
        color: white;
        border-radius: 12px;
        padding: 22px 20px;
        margin-bottom: 14px;
        box-shadow: var(--cf-shadow);
    }

    .cf-badge {
        display: inline-block;
        font-size: 0.6rem;
        font-weight: 700;
        letter-spacing: 0.2em;
        text-transform: uppercase;
        color: #93C5FD;
        background: rgba(30, 58, 138, 0.4);
        border-radius: 999px;
        padding: 3px 10px;
    }

    .cf-wordmark {
        font-family: Georgia, "Times New Roman", serif;
        font-size: 2.6rem;
        line-height: 1.1;
        margin-top: 6px;
    }

    .cf-tagline {
        font-size: 0.75rem;
        color: rgba(219, 234, 254, 0.6);
        margin-top: 4px;
    }

    .cf-card {
        background: var(--cf-card-bg);
        border: 1px solid var(--cf-border);
        border-radius: 14px;
        padding: 14px 16px;
        margin-bottom: 10px;
        box-shadow: var(--cf-shadow);
    }

    .cf-card-title {
        font-weight: 800;
        font-size: 1.05rem;
        color: var(--cf-text);
    }

    .cf-card-subtitle {
        font-size: 0.72rem;
        color: var(--cf-muted);
        text-transform: uppercase;
        letter-spacing: 0.02em;
    }

    .cf-rank-row {
        display: flex;
        align-items: center;
        gap: 12px;
        padding: 10px 14px;
        border-radius: 14px;
        border: 1px solid var(--cf-border);
        background: var(--cf-card-bg);
        margin-bottom: 8px;
    }

    .cf-rank-badge {
        width: 40px;
        height: 40px;
        border-radius: 10px;
        display: flex;
        align-items: center;
        justify-content: center;
        font-weight: 900;
        color: white;
    }

    .cf-member {
        flex: 1;
        font-weight: 700;
    }

    .cf-member-code {
        font-size: 0.62rem;
        font-weight: 900;
        border: 1px solid var(--cf-border);
        border-radius: 6px;
        padding: 1px 5px;
        margin-left: 6px;
    }

    .cf-stat {
        text-align: center;
        min-width: 58px;
    }

    .cf-stat-value {
        font-weight: 900;
        font-size: 1.1rem;
    }

    .cf-stat-label {
        font-size: 0.68rem;
        font-weight: 900;
        color: var(--cf-muted);
    }

    .cf-commentary {
        font-family: Georgia, "Times New Roman", serif;
        line-height: 1.7;
        color: #334155;
    }

    .cf-disclaimer {
        font-size: 0.72rem;
        color: var(--cf-muted);
        margin-top: 18px;
        text-align: center;
    }

    .stButton > button {
        border-radius: 10px;
        font-weight: 700;
    }
    </style>
    """
