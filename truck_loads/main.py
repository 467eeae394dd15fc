from datetime import date

import streamlit as st

from truck_loads.app.charts import chart_config, weight_by_category_chart
from truck_loads.app.config import paginate_enabled, seed_samples_enabled
from truck_loads.app.context import FilterState
from truck_loads.app.export import build_export, save_export
from truck_loads.app.frames import loads_to_frame
from truck_loads.app.layout import render_filter_bar
from truck_loads.app.load_store import LoadNotFoundError, LoadStore
from truck_loads.app.logging_setup import setup_logging
from truck_loads.app.metrics import category_breakdown
from truck_loads.app.models import DEFAULT_CATEGORY, Load, LoadCategory, sample_loads
from truck_loads.app.parsing import parse_load_number, parse_weight
from truck_loads.app.report import ReportFormatter

logger = setup_logging()

st.set_page_config(page_title="Load Management", layout="centered")

# =========================================================
# SESSION STATE
# =========================================================
STORE_KEY = "load_store"
EXPORT_KEY = "load_export"


def _store() -> LoadStore:
    return st.session_state[STORE_KEY]


def _init_state(today: date) -> None:
    if STORE_KEY not in st.session_state:
        seed = sample_loads(today) if seed_samples_enabled() else []
        st.session_state[STORE_KEY] = LoadStore(seed)
        logger.info("Started session with %d sample load(s)", len(seed))
    if "draft_date" not in st.session_state:
        st.session_state.draft_date = today
    if "default_truck_number" not in st.session_state:
        st.session_state.default_truck_number = ""
    if "draft_truck" not in st.session_state:
        st.session_state.draft_truck = st.session_state.default_truck_number
    _reset_draft_fields(keep_existing=True)


def _reset_draft_fields(keep_existing: bool = False) -> None:
    defaults = {
        "draft_category": DEFAULT_CATEGORY,
        "draft_origin": "",
        "draft_destination": "",
        "draft_weight": 0.0,
        "draft_notes": "",
    }
    for key, value in defaults.items():
        if keep_existing and key in st.session_state:
            continue
        st.session_state[key] = value


# =========================================================
# CALLBACKS
# =========================================================
def _remember_truck_number() -> None:
    st.session_state.default_truck_number = st.session_state.draft_truck


def _add_load() -> None:
    store = _store()
    load = store.new_load(
        date=st.session_state.draft_date,
        truck_number=st.session_state.draft_truck.strip(),
        category=st.session_state.draft_category,
        origin=st.session_state.draft_origin.strip(),
        destination=st.session_state.draft_destination.strip(),
        weight=st.session_state.draft_weight,
        notes=st.session_state.draft_notes.strip(),
    )
    store.append(load)
    st.session_state.pop(EXPORT_KEY, None)
    # Next draft keeps the date and truck number, everything else resets.
    st.session_state.draft_truck = st.session_state.default_truck_number
    _reset_draft_fields()
    st.session_state.form_notice = "success", f"Added load #{load.load_number} for {load.date:%d/%m/%y}."


def _save_edit(load_id: str) -> None:
    store = _store()
    try:
        load = store.get(load_id)
    except LoadNotFoundError:
        st.session_state.edit_notice = "error", "That load was already removed."
        return
    prefix = f"edit_{load_id}"
    number = parse_load_number(st.session_state[f"{prefix}_number"], load.load_number)
    weight = parse_weight(st.session_state[f"{prefix}_weight"], load.weight)
    store.update(
        load_id,
        date=st.session_state[f"{prefix}_date"],
        truck_number=st.session_state[f"{prefix}_truck"].strip(),
        load_number=number.value,
        category=st.session_state[f"{prefix}_category"],
        origin=st.session_state[f"{prefix}_origin"].strip(),
        destination=st.session_state[f"{prefix}_destination"].strip(),
        weight=weight.value,
        notes=st.session_state[f"{prefix}_notes"].strip(),
    )
    # Show the value actually kept when the typed text was rejected.
    st.session_state[f"{prefix}_number"] = str(number.value)
    st.session_state[f"{prefix}_weight"] = f"{weight.value:g}"
    problems = [r.notes for r in (number, weight) if not r.ok]
    if problems:
        st.session_state.edit_notice = "warning", "Kept previous value: " + " ".join(problems)
    else:
        st.session_state.edit_notice = "success", "Changes saved."
    st.session_state.pop(EXPORT_KEY, None)


def _delete_load(index: int, view: list[Load]) -> None:
    try:
        removed = _store().delete_at({index}, view=view)
    except LoadNotFoundError as exc:
        st.session_state.edit_notice = "error", str(exc)
        return
    st.session_state.edit_notice = "success", f"Deleted load #{removed[0].load_number}."
    st.session_state.pop(EXPORT_KEY, None)


# =========================================================
# PAGES
# =========================================================
def _show_notice(key: str) -> None:
    """Show and clear a (level, text) notice left by a callback."""
    notice = st.session_state.pop(key, None)
    if notice:
        level, text = notice
        getattr(st, level)(text)


def _medium_date(d: date) -> str:
    return f"{d:%b} {d.day}, {d.year}"


def _render_form() -> None:
    store = _store()
    st.subheader("New Load")
    st.date_input("Date", key="draft_date")
    st.text_input("Truck Number", key="draft_truck", on_change=_remember_truck_number)
    st.text_input(
        "Load Number",
        value=str(store.next_load_number(st.session_state.draft_date)),
        disabled=True,
    )
    st.selectbox(
        "Category",
        options=list(LoadCategory),
        format_func=lambda c: c.display_name,
        key="draft_category",
    )
    st.text_input("Origin", key="draft_origin")
    st.text_input("Destination", key="draft_destination")
    st.number_input("Weight", min_value=0.0, step=1.0, format="%.0f", key="draft_weight")
    st.text_input("Notes", key="draft_notes")
    st.button("Add Load", type="primary", on_click=_add_load)

    _show_notice("form_notice")


def _seed_edit_state(load: Load) -> str:
    prefix = f"edit_{load.id}"
    defaults = {
        "date": load.date,
        "truck": load.truck_number,
        "number": str(load.load_number),
        "category": load.category,
        "origin": load.origin,
        "destination": load.destination,
        "weight": f"{load.weight:g}",
        "notes": load.notes,
    }
    for suffix, value in defaults.items():
        key = f"{prefix}_{suffix}"
        if key not in st.session_state:
            st.session_state[key] = value
    return prefix


def _render_edit_form(load: Load) -> None:
    prefix = _seed_edit_state(load)
    st.date_input("Date", key=f"{prefix}_date")
    st.text_input("Truck Number", key=f"{prefix}_truck")
    st.text_input("Load Number", key=f"{prefix}_number")
    st.selectbox(
        "Category",
        options=list(LoadCategory),
        format_func=lambda c: c.display_name,
        key=f"{prefix}_category",
    )
    st.text_input("Origin", key=f"{prefix}_origin")
    st.text_input("Destination", key=f"{prefix}_destination")
    st.text_input("Weight", key=f"{prefix}_weight")
    st.text_input("Notes", key=f"{prefix}_notes")
    st.button("Save Changes", key=f"{prefix}_save", on_click=_save_edit, args=(load.id,))


def _render_list(today: date) -> None:
    st.subheader("Load List")
    filters: FilterState = render_filter_bar(today)
    shown = _store().filtered(filters)
    st.caption(f"{filters.summary()} · {len(shown)} load(s)")

    _show_notice("edit_notice")

    if not shown:
        st.write("No loads to show.")
    for index, load in enumerate(shown):
        title = f"{_medium_date(load.date)} · {load.truck_number or '-'} · Load #{load.load_number}"
        with st.expander(title):
            st.markdown(
                "\n".join(
                    [
                        f"- **Category:** {load.category.display_name}",
                        f"- **Origin:** {load.origin}",
                        f"- **Destination:** {load.destination}",
                        f"- **Weight:** {int(load.weight)} kg",
                        f"- **Notes:** {load.notes}",
                    ]
                )
            )
            _render_edit_form(load)
            st.button(
                "Delete Load",
                key=f"delete_{load.id}",
                on_click=_delete_load,
                args=(index, shown),
            )

    if shown:
        frame = loads_to_frame(shown)
        breakdown = category_breakdown(frame)
        st.plotly_chart(
            weight_by_category_chart(breakdown),
            width="stretch",
            config=chart_config(),
        )

    _render_exports(shown, filters)


def _render_exports(shown: list[Load], filters: FilterState) -> None:
    if st.button("Export to PDF", type="primary"):
        bundle = build_export(shown, filters, formatter=ReportFormatter(paginate=paginate_enabled()))
        try:
            path = save_export(bundle)
            st.caption(f"Saved {path.name}")
        except OSError as exc:
            st.warning(f"Report could not be saved locally: {exc}")
        st.session_state[EXPORT_KEY] = bundle

    bundle = st.session_state.get(EXPORT_KEY)
    if bundle is None:
        return
    if bundle.context.filters != filters:
        # Downloads always cover the view on screen.
        st.session_state.pop(EXPORT_KEY, None)
        return
    if bundle.report.overflow_rows:
        st.warning(
            f"{bundle.report.overflow_rows} row(s) did not fit on the page. "
            "Narrow the date range or enable pagination."
        )
    pdf_col, csv_col, html_col = st.columns(3)
    pdf_col.download_button(
        "Download PDF", data=bundle.pdf_bytes, file_name=bundle.pdf_filename, mime="application/pdf"
    )
    csv_col.download_button(
        "Download CSV", data=bundle.csv_text, file_name=bundle.csv_filename, mime="text/csv"
    )
    html_col.download_button(
        "Download HTML", data=bundle.html, file_name=bundle.html_filename, mime="text/html"
    )


def main() -> None:
    today = date.today()
    _init_state(today)
    st.title("Load Management")
    form_tab, list_tab = st.tabs(["Add Load", "View Loads"])
    with form_tab:
        _render_form()
    with list_tab:
        _render_list(today)


main()
