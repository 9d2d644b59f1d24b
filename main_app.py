"""
Watchlist Board - Streamlit UI
Categorized movie/TV watchlist with catalog search, reordering and import/export
"""

import streamlit as st
import sys
import os
import html

# =============================================================================
# IMPORTS AND SETUP
# =============================================================================

# Add src directory to path for imports
current_dir = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(current_dir, 'src')

if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from board_model import (
    add_item,
    build_board,
    create_manual_item,
    delete_item,
    edit_item,
    find_item,
    item_from_search_result,
    update_item,
)
from reorder_engine import apply_drag, move_to_category
from search_aggregator import SearchSession, search_catalogs
from view_projection import (
    category_counts,
    default_category_filters,
    filter_board,
    is_top_rated,
)
from watchlist_io import EXPORT_FILENAME, board_to_frame, export_board_json, import_board
from watchlist_utils import (
    CATEGORY_CONFIG,
    CATEGORY_KEYS,
    CATEGORY_LABELS,
    CATEGORY_TITLES,
    FALLBACK_POSTER,
    MEDIA_TYPES,
    RATING_MAX,
    RATING_MIN,
    SAMPLE_ITEMS,
    SEARCH_CACHE_TTL,
    TYPE_FILTERS,
    configure_logging,
)

configure_logging()

# =============================================================================
# SESSION STATE MANAGEMENT
# =============================================================================

def initialize_session_state():
    """Initialize all required session state variables."""

    # Board
    if "board" not in st.session_state:
        st.session_state.board = build_board(SAMPLE_ITEMS)

    # Filters
    if "category_filters" not in st.session_state:
        st.session_state.category_filters = default_category_filters()

    if "global_type_filter" not in st.session_state:
        st.session_state.global_type_filter = "all"

    # Display flags
    if "compact_mode" not in st.session_state:
        st.session_state.compact_mode = False

    if "highlight_top_rated" not in st.session_state:
        st.session_state.highlight_top_rated = False

    # UI state
    if "editing_id" not in st.session_state:
        st.session_state.editing_id = None

    if "import_error" not in st.session_state:
        st.session_state.import_error = ""

    if "last_import_key" not in st.session_state:
        st.session_state.last_import_key = None

    # Search
    if "search_session" not in st.session_state:
        st.session_state.search_session = SearchSession(search=cached_search)

# =============================================================================
# UI STYLING
# =============================================================================

def inject_custom_css():
    """Inject custom CSS for the glass-panel board."""
    st.markdown("""
    <style>
    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}

    .category-title {
        font-size: 0.8rem;
        letter-spacing: 0.3em;
        text-transform: uppercase;
        opacity: 0.7;
    }

    .watch-card-meta {
        font-size: 0.75rem;
        text-transform: uppercase;
        letter-spacing: 0.2em;
        opacity: 0.6;
    }

    .watch-card-notes {
        font-size: 0.75rem;
        opacity: 0.6;
    }

    .spotlight {
        border: 1px solid rgba(255, 255, 255, 0.6);
        border-radius: 12px;
        box-shadow: 0 0 25px rgba(255, 255, 255, 0.18);
        padding: 0.25rem 0.5rem;
    }

    .drop-hint {
        border: 1px dashed rgba(255, 255, 255, 0.2);
        border-radius: 16px;
        padding: 2rem;
        text-align: center;
        font-size: 0.7rem;
        letter-spacing: 0.3em;
        text-transform: uppercase;
        opacity: 0.4;
    }
    </style>
    """, unsafe_allow_html=True)

# =============================================================================
# CORE FUNCTIONS
# =============================================================================

@st.cache_data(ttl=SEARCH_CACHE_TTL, show_spinner=False)
def cached_search(query):
    """Catalog search with a short-lived cache, keyed by query text."""
    return search_catalogs(query)

def set_board(board):
    st.session_state.board = board

def handle_add_from_search(result):
    """Add a search result to the head of Planning and reset the search box."""
    item = item_from_search_result(result)
    set_board(add_item(st.session_state.board, item, item["category"]))
    st.session_state.search_session.clear()
    st.session_state["search_term"] = ""

def handle_manual_add(title, media_type, category, poster, year):
    """Add a manually entered item; blank titles are ignored."""
    item = create_manual_item(title, media_type, category, poster=poster, year=year)
    if item is None:
        return False
    set_board(add_item(st.session_state.board, item, category))
    return True

def handle_drop(active_id, over_id):
    """Apply a completed move gesture reported by the board controls."""
    set_board(apply_drag(st.session_state.board, active_id, over_id))

def handle_import(uploaded_file):
    """Replace the board from an uploaded JSON file, once per file."""
    import_key = (uploaded_file.name, uploaded_file.size)
    if st.session_state.last_import_key == import_key:
        return
    st.session_state.last_import_key = import_key

    board, error = import_board(st.session_state.board, uploaded_file.getvalue())
    st.session_state.import_error = error or ""
    if error is None:
        set_board(board)
        st.session_state.editing_id = None

def drop_target_options(board, item):
    """
    Build the drop targets offered for an item.

    Args:
        board: Current board
        item: Item being moved

    Returns:
        List of (label, over_id) pairs
    """
    options = [(f"End of {CATEGORY_TITLES[key]}", key) for key in CATEGORY_KEYS]
    for key in CATEGORY_KEYS:
        for entry in board[key]:
            if entry["id"] == item["id"]:
                continue
            options.append((f"{CATEGORY_LABELS[key]} · onto {entry['title']}", entry["id"]))
    return options

# =============================================================================
# UI COMPONENTS
# =============================================================================

def card_markup(item, spotlight=False):
    """
    Build the escaped HTML fragments for a card.

    Args:
        item: Watch item
        spotlight: Wrap the title in the top-rated highlight

    Returns:
        Tuple of (title_html, meta_html, notes_html)
    """
    title_html = f"<strong>{html.escape(str(item.get('title', '')))}</strong>"
    if spotlight:
        title_html = f'<div class="spotlight">{title_html}</div>'

    meta = str(item.get("type", ""))
    if item.get("year"):
        meta += f" · {item['year']}"
    rating = item.get("rating")
    meta += f" · {rating if rating is not None else '—'}"
    meta_html = f'<div class="watch-card-meta">{html.escape(meta)}</div>'

    notes = str(item.get("notes") or "notes waiting")
    notes_html = f'<div class="watch-card-notes">{html.escape(notes)}</div>'
    return title_html, meta_html, notes_html


def render_search_results(results):
    """Render search results with add buttons."""
    if not results:
        st.caption("no matches")
        return

    for result in results:
        cols = st.columns([1, 3])
        with cols[0]:
            if result.get("poster"):
                st.image(result["poster"], use_container_width=True)
            else:
                st.caption(result["type"])
        with cols[1]:
            kind = "Movie" if result["type"] == "movie" else "TV"
            year = f" • {result['year']}" if result.get("year") else ""
            st.markdown(f"**{result['title']}**")
            st.caption(f"{kind}{year}")
            # Callback so the search box can be cleared before it is redrawn
            st.button(
                "add",
                key=f"add_{result['id']}",
                on_click=handle_add_from_search,
                args=(result,),
            )

def render_sidebar():
    """Render search, manual entry, filters, display toggles and import/export."""
    with st.sidebar:
        st.markdown("## Watchlist")
        st.caption("curate stories")

        # Search
        query = st.text_input("search", key="search_term", placeholder="title or talent")
        if query and len(query.strip()) >= 2:
            with st.spinner("searching…"):
                results = st.session_state.search_session.run(query)
            render_search_results(results)

        # Manual entry
        st.markdown("### manual")
        with st.form("manual_add", clear_on_submit=True):
            title = st.text_input("title")
            media_type = st.radio("type", MEDIA_TYPES, horizontal=True)
            poster = st.text_input("poster url")
            year = st.text_input("year")
            category = st.radio(
                "list",
                CATEGORY_KEYS,
                index=CATEGORY_KEYS.index("planning"),
                format_func=lambda key: CATEGORY_LABELS[key],
                horizontal=True,
            )
            if st.form_submit_button("add"):
                if handle_manual_add(title, media_type, category, poster, year):
                    st.success(f"✅ Added {title.strip()}")

        # Focus
        st.markdown("### focus")
        st.session_state.global_type_filter = st.radio(
            "show",
            TYPE_FILTERS,
            index=TYPE_FILTERS.index(st.session_state.global_type_filter),
            horizontal=True,
        )
        st.session_state.compact_mode = st.checkbox(
            "compact grid", value=st.session_state.compact_mode
        )
        st.session_state.highlight_top_rated = st.checkbox(
            "highlight top rated", value=st.session_state.highlight_top_rated
        )

        # Import / export
        st.markdown("### archive")
        st.download_button(
            "export",
            data=export_board_json(st.session_state.board),
            file_name=EXPORT_FILENAME,
            mime="application/json",
        )
        uploaded = st.file_uploader("import", type=["json"])
        if uploaded is not None:
            handle_import(uploaded)
        if st.session_state.import_error:
            st.error(st.session_state.import_error)

def render_watch_card(item):
    """Render a single watchlist card with edit and move controls."""
    compact = st.session_state.compact_mode
    spotlight = st.session_state.highlight_top_rated and is_top_rated(item)

    if not compact:
        st.image(item.get("poster") or FALLBACK_POSTER, use_container_width=True)

    title_html, meta_html, notes_html = card_markup(item, spotlight)
    st.markdown(title_html, unsafe_allow_html=True)
    st.markdown(meta_html, unsafe_allow_html=True)

    if not compact:
        st.markdown(notes_html, unsafe_allow_html=True)

    cols = st.columns(2)
    with cols[0]:
        if st.button("edit", key=f"edit_{item['id']}"):
            st.session_state.editing_id = item["id"]
            st.rerun()
    with cols[1]:
        with st.popover("move"):
            options = drop_target_options(st.session_state.board, item)
            choice = st.selectbox(
                "drop onto",
                options,
                format_func=lambda option: option[0],
                key=f"target_{item['id']}",
            )
            if st.button("move", key=f"move_{item['id']}"):
                handle_drop(item["id"], choice[1])
                st.rerun()

def render_category_section(key, title, items):
    """Render one category with its filter and cards."""
    counts = category_counts(st.session_state.board)
    st.markdown(f'<div class="category-title">{title} · {counts[key]}</div>', unsafe_allow_html=True)

    filters = st.session_state.category_filters
    filters[key] = st.selectbox(
        "filter",
        TYPE_FILTERS,
        index=TYPE_FILTERS.index(filters.get(key, "all")),
        key=f"filter_{key}",
        label_visibility="collapsed",
    )

    if not items:
        st.markdown('<div class="drop-hint">drag here</div>', unsafe_allow_html=True)
        return

    per_row = 4 if st.session_state.compact_mode else 3
    for start in range(0, len(items), per_row):
        cols = st.columns(per_row)
        for col, item in zip(cols, items[start:start + per_row]):
            with col:
                render_watch_card(item)

def render_board():
    """Render the four categories as a two-column grid."""
    filtered = filter_board(
        st.session_state.board,
        st.session_state.category_filters,
        st.session_state.global_type_filter,
    )
    for row_start in range(0, len(CATEGORY_CONFIG), 2):
        cols = st.columns(2)
        for col, (key, title, _) in zip(cols, CATEGORY_CONFIG[row_start:row_start + 2]):
            with col:
                with st.container(border=True):
                    render_category_section(key, title, filtered[key])

def render_edit_panel():
    """Render the edit panel for the selected item."""
    item = find_item(st.session_state.board, st.session_state.editing_id)
    if item is None:
        st.session_state.editing_id = None
        return

    with st.container(border=True):
        st.markdown(f"### {item['title']}")
        with st.form(f"edit_{item['id']}"):
            title = st.text_input("title", value=item["title"])
            poster = st.text_input("poster url", value=item.get("poster") or "")
            media_type = st.radio(
                "type",
                MEDIA_TYPES,
                index=MEDIA_TYPES.index(item.get("type", "movie")),
                horizontal=True,
            )
            year = st.text_input("year", value=item.get("year") or "")
            rating_options = [None] + list(range(RATING_MIN, RATING_MAX + 1))
            rating = st.select_slider(
                "rating",
                options=rating_options,
                value=item.get("rating"),
                format_func=lambda value: "—" if value is None else str(value),
            )
            notes = st.text_area("notes", value=item.get("notes") or "")

            cols = st.columns(3)
            with cols[0]:
                save = st.form_submit_button("save", type="primary")
            with cols[1]:
                remove = st.form_submit_button("delete")
            with cols[2]:
                close = st.form_submit_button("close")

        if save:
            updated = edit_item(
                item,
                title=title,
                poster=poster,
                type=media_type,
                year=year,
                rating=rating,
                notes=notes,
            )
            set_board(update_item(st.session_state.board, updated))
            st.rerun()
        if remove:
            set_board(delete_item(st.session_state.board, item["id"]))
            st.session_state.editing_id = None
            st.rerun()
        if close:
            st.session_state.editing_id = None
            st.rerun()

        # Quick move without leaving the panel
        target = st.radio(
            "send to",
            CATEGORY_KEYS,
            index=CATEGORY_KEYS.index(item["category"]),
            format_func=lambda key: CATEGORY_TITLES[key],
            horizontal=True,
            key=f"send_{item['id']}",
        )
        if target != item["category"]:
            set_board(move_to_category(st.session_state.board, item["id"], target))
            st.rerun()

def render_overview():
    """Render the flattened board as a table."""
    frame = board_to_frame(st.session_state.board)
    if frame.empty:
        st.info("The watchlist is empty.")
        return
    st.dataframe(frame, use_container_width=True, hide_index=True)

# =============================================================================
# MAIN APPLICATION
# =============================================================================

def main():
    """Main application function."""

    st.set_page_config(
        page_title="Watchlist",
        page_icon="🎬",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    initialize_session_state()
    inject_custom_css()

    render_sidebar()

    if st.session_state.editing_id:
        render_edit_panel()

    board_tab, overview_tab = st.tabs(["Board", "Overview"])
    with board_tab:
        render_board()
    with overview_tab:
        render_overview()

if __name__ == "__main__":
    main()
