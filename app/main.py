"""
Streamlit Frontend for Studio Manager

This is the screen the studio owner uses every day:
- Financeiro: balance cards, ledger, new transaction form
- Agenda: upcoming, history and calendar views of appointments
- Clientes: roster with service history
- Configurações: where data lives and recent activity

All labels are in Portuguese. Every button calls one operation on the
shared StudioApp and reruns the page.
"""

from datetime import date, time
from typing import Optional

import streamlit as st
from pydantic import ValidationError

from studio.config import get_settings, validate_all_settings
from studio.formatting import (
    TRANSACTION_TYPE_LABELS,
    completed_services_label,
    format_brl,
    format_day_heading,
    format_month_title,
    format_short_date,
    format_signed_amount,
    format_weekday_date,
    status_label,
)
from studio.models.records import Appointment, AppointmentStatus, Client, TransactionType
from studio.orchestrator import StudioApp, create_app_components
from studio.queries import WEEKDAY_HEADERS, build_month, client_history, shift_month


# Page configuration
st.set_page_config(
    page_title="Controle Financeiro & Agenda",
    page_icon="💅",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .income { color: #15803d; font-weight: 600; }
    .expense { color: #b91c1c; font-weight: 600; }
    .badge {
        padding: 2px 8px;
        border-radius: 999px;
        font-size: 0.75em;
        font-weight: 600;
    }
    .badge-scheduled { background-color: #dbeafe; color: #1e40af; }
    .badge-completed { background-color: #dcfce7; color: #166534; }
    .badge-canceled { background-color: #fee2e2; color: #991b1b; }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_app() -> StudioApp:
    """Get or create the application (cached for the server process)."""
    return create_app_components()


def status_badge(status: AppointmentStatus) -> str:
    return f'<span class="badge badge-{status.value}">{status_label(status)}</span>'


def main():
    """Main application entry point."""
    app = get_app()
    settings = get_settings().app

    st.sidebar.title(settings.business_name)
    st.sidebar.caption(settings.business_tagline)
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navegar para:",
        ["💰 Financeiro", "📅 Agenda", "👥 Clientes", "⚙️ Configurações"],
        index=0,
    )

    if page == "💰 Financeiro":
        render_financials_page(app)
    elif page == "📅 Agenda":
        render_scheduler_page(app)
    elif page == "👥 Clientes":
        render_clients_page(app)
    elif page == "⚙️ Configurações":
        render_settings_page(app)


# =============================================================================
# FINANCEIRO
# =============================================================================

def render_financials_page(app: StudioApp):
    """Render balance cards, the ledger and the add form."""
    st.title("💰 Financeiro")

    summary = app.ledger.summary()
    col1, col2, col3 = st.columns(3)
    col1.metric("Entradas", format_brl(summary.income))
    col2.metric("Saídas", format_brl(summary.expense))
    col3.metric("Saldo", format_brl(summary.balance))

    with st.expander("➕ Adicionar Transação"):
        with st.form("new_transaction", clear_on_submit=True):
            kind = st.radio(
                "Tipo",
                options=list(TransactionType),
                format_func=lambda t: TRANSACTION_TYPE_LABELS[t],
                horizontal=True,
            )
            description = st.text_input("Descrição *", placeholder="Ex: Manicure e Pedicure")
            amount = st.number_input("Valor (R$) *", min_value=0.0, step=0.01, format="%.2f")
            day = st.date_input("Data *", value=date.today(), format="DD/MM/YYYY")

            if st.form_submit_button("Salvar", type="primary"):
                if not description.strip() or not day:
                    st.error("Preencha descrição, valor e data.")
                else:
                    app.ledger.add(description, amount, kind, day)
                    st.rerun()

    st.markdown("---")

    if not app.ledger.transactions:
        st.info("Nenhuma transação registrada.")
        return

    for transaction in app.ledger.transactions:
        css = "income" if transaction.type == TransactionType.INCOME else "expense"
        col1, col2, col3 = st.columns([5, 2, 1])
        with col1:
            st.markdown(f"**{transaction.description}**")
            st.caption(format_short_date(transaction.date))
        with col2:
            st.markdown(
                f'<span class="{css}">{format_signed_amount(transaction)}</span>',
                unsafe_allow_html=True,
            )
        with col3:
            if st.button("🗑️", key=f"del_tx_{transaction.id}", help="Excluir"):
                app.ledger.delete(transaction.id)
                st.rerun()


# =============================================================================
# AGENDA
# =============================================================================

def render_scheduler_page(app: StudioApp):
    """Render the appointment views and the booking form."""
    st.title("📅 Agenda")

    if "editing_appointment_id" not in st.session_state:
        st.session_state.editing_appointment_id = None

    editing = None
    if st.session_state.editing_appointment_id is not None:
        editing = app.state.find_appointment(st.session_state.editing_appointment_id)

    with st.expander("✏️ Editar Agendamento" if editing else "➕ Agendar", expanded=editing is not None):
        render_appointment_form(app, editing)

    upcoming_tab, history_tab, calendar_tab = st.tabs(["Próximos", "Histórico", "Calendário"])

    with upcoming_tab:
        upcoming = app.scheduler.upcoming()
        if not upcoming:
            st.info("Nenhum agendamento futuro.")
        for appointment in upcoming:
            render_appointment_row(app, appointment, key_prefix="up", show_date=True)

    with history_tab:
        history = app.scheduler.history()
        if not history:
            st.info("Nenhum registro no histórico.")
        for appointment in history:
            render_appointment_row(app, appointment, key_prefix="hist", show_date=True)

    with calendar_tab:
        render_calendar(app)


def render_appointment_form(app: StudioApp, editing: Optional[Appointment]):
    form_key = f"appointment_form_{editing.id}" if editing else "appointment_form_new"
    with st.form(form_key, clear_on_submit=editing is None):
        client_name = st.text_input(
            "Nome da Cliente *",
            value=editing.client_name if editing else "",
            placeholder="Ex: Maria da Silva",
        )
        service = st.text_input(
            "Serviço *",
            value=editing.service if editing else "",
            placeholder="Ex: Manicure e Pedicure",
        )
        price = st.number_input(
            "Preço (R$) *",
            value=float(editing.price) if editing else 0.0,
            min_value=0.0,
            step=0.01,
            format="%.2f",
        )
        col1, col2 = st.columns(2)
        with col1:
            day = st.date_input(
                "Data *",
                value=editing.date if editing else date.today(),
                format="DD/MM/YYYY",
            )
        with col2:
            at = st.time_input(
                "Hora *",
                value=editing.time if editing else time(9, 0),
                step=900,
            )

        col1, col2 = st.columns(2)
        with col1:
            submitted = st.form_submit_button("Salvar", type="primary")
        with col2:
            canceled = st.form_submit_button("Cancelar")

    if canceled:
        st.session_state.editing_appointment_id = None
        st.rerun()

    if submitted:
        if not (client_name.strip() and service.strip() and day and at):
            st.error("Preencha todos os campos obrigatórios.")
            return
        try:
            if editing:
                app.scheduler.update(editing.model_copy(update={
                    "client_name": client_name,
                    "service": service,
                    "date": day,
                    "time": at,
                    "price": price,
                }))
                st.session_state.editing_appointment_id = None
            else:
                app.scheduler.add(client_name, service, day, at, price)
        except ValidationError as e:
            st.error(f"Dados inválidos: {e.error_count()} campo(s) com problema.")
            return
        st.rerun()


def render_appointment_row(app: StudioApp, appointment: Appointment, key_prefix: str, show_date: bool):
    col1, col2 = st.columns([3, 2])
    with col1:
        header = f"**{appointment.client_name}**"
        if not appointment.is_scheduled:
            header += " " + status_badge(appointment.status)
        st.markdown(header, unsafe_allow_html=True)
        st.markdown(f"{appointment.service} - **{format_brl(appointment.price)}**")
        when = appointment.time.strftime("%H:%M")
        if show_date:
            st.caption(f"{format_weekday_date(appointment.date)} às {when}")
        else:
            st.caption(f"Às {when}")

    with col2:
        key = f"{key_prefix}_{appointment.id}"
        if appointment.is_scheduled:
            b1, b2, b3, b4 = st.columns(4)
            if b1.button("✅", key=f"done_{key}", help="Concluir"):
                app.scheduler.complete(appointment.id)
                st.rerun()
            if b2.button("✖️", key=f"cancel_{key}", help="Cancelar"):
                app.scheduler.cancel(appointment.id)
                st.rerun()
            if b3.button("✏️", key=f"edit_{key}", help="Editar"):
                st.session_state.editing_appointment_id = appointment.id
                st.rerun()
            if b4.button("🗑️", key=f"del_{key}", help="Excluir"):
                app.scheduler.delete(appointment.id)
                st.rerun()
        elif st.button("🗑️", key=f"del_{key}", help="Excluir"):
            app.scheduler.delete(appointment.id)
            st.rerun()
    st.markdown("---")


def render_calendar(app: StudioApp):
    """Month grid with navigation; clicking a day lists its appointments."""
    today = date.today()
    if "calendar_month" not in st.session_state:
        st.session_state.calendar_month = (today.year, today.month)
    if "selected_day" not in st.session_state:
        st.session_state.selected_day = today

    year, month = st.session_state.calendar_month

    nav1, nav2, nav3 = st.columns([1, 4, 1])
    if nav1.button("‹", key="prev_month"):
        st.session_state.calendar_month = shift_month(year, month, -1)
        st.rerun()
    nav2.markdown(f"<h4 style='text-align:center'>{format_month_title(year, month)}</h4>", unsafe_allow_html=True)
    if nav3.button("›", key="next_month"):
        st.session_state.calendar_month = shift_month(year, month, 1)
        st.rerun()

    grid = build_month(
        year,
        month,
        app.state.appointments,
        today=today,
        selected=st.session_state.selected_day,
    )

    for column, header in zip(st.columns(7), WEEKDAY_HEADERS):
        column.markdown(f"**{header}**")

    for week in grid.weeks:
        for column, cell in zip(st.columns(7), week):
            if cell is None:
                continue
            label = str(cell.day.day)
            if cell.has_appointments:
                label += " •"
            if column.button(
                label,
                key=f"day_{cell.day.isoformat()}",
                type="primary" if cell.is_selected else "secondary",
            ):
                st.session_state.selected_day = cell.day
                st.rerun()

    selected = st.session_state.selected_day
    st.markdown(f"#### Agenda para {format_day_heading(selected)}")
    day_appointments = app.scheduler.on_date(selected)
    if not day_appointments:
        st.info("Nenhum agendamento para este dia.")
    for appointment in day_appointments:
        render_appointment_row(app, appointment, key_prefix="cal", show_date=False)


# =============================================================================
# CLIENTES
# =============================================================================

def render_clients_page(app: StudioApp):
    """Render the roster, the client form and each client's history."""
    st.title("👥 Clientes")

    if "editing_client_id" not in st.session_state:
        st.session_state.editing_client_id = None

    editing = None
    if st.session_state.editing_client_id is not None:
        editing = app.state.find_client(st.session_state.editing_client_id)

    with st.expander("✏️ Editar Cliente" if editing else "➕ Adicionar", expanded=editing is not None):
        render_client_form(app, editing)

    if not app.roster.clients:
        st.info("Nenhuma cliente cadastrada.")
        return

    for client in app.roster.clients:
        render_client_row(app, client)


def render_client_form(app: StudioApp, editing: Optional[Client]):
    form_key = f"client_form_{editing.id}" if editing else "client_form_new"
    with st.form(form_key, clear_on_submit=editing is None):
        name = st.text_input("Nome *", value=editing.name if editing else "")
        phone = st.text_input("Telefone", value=(editing.phone or "") if editing else "")
        notes = st.text_area("Observações", value=(editing.notes or "") if editing else "")

        col1, col2 = st.columns(2)
        with col1:
            submitted = st.form_submit_button("Salvar", type="primary")
        with col2:
            canceled = st.form_submit_button("Cancelar")

    if canceled:
        st.session_state.editing_client_id = None
        st.rerun()

    if submitted:
        if not name.strip():
            st.error("Informe o nome da cliente.")
            return
        try:
            if editing:
                app.roster.update(editing.model_copy(update={
                    "name": name,
                    "phone": phone,
                    "notes": notes,
                }))
                st.session_state.editing_client_id = None
            else:
                app.roster.add(name, phone, notes)
        except ValidationError as e:
            st.error(f"Dados inválidos: {e.error_count()} campo(s) com problema.")
            return
        st.rerun()


def render_client_row(app: StudioApp, client: Client):
    col1, col2, col3 = st.columns([6, 1, 1])
    with col1:
        st.markdown(f"**{client.name}**")
        if client.phone:
            st.caption(client.phone)
        if client.notes:
            st.markdown(f"*Obs: {client.notes}*")
        st.caption(completed_services_label(client.completed_appointments))
    with col2:
        if st.button("✏️", key=f"edit_client_{client.id}", help="Editar"):
            st.session_state.editing_client_id = client.id
            st.rerun()
    with col3:
        if st.button("🗑️", key=f"del_client_{client.id}", help="Excluir"):
            app.roster.delete(client.id)
            st.rerun()

    history = client_history(app.state.appointments, client)
    if history:
        with st.expander("Histórico de Serviços"):
            for appointment in history:
                st.markdown(
                    f"{format_short_date(appointment.date)} - {appointment.service} "
                    f"({format_brl(appointment.price)})"
                )
    st.markdown("---")


# =============================================================================
# CONFIGURAÇÕES
# =============================================================================

def render_settings_page(app: StudioApp):
    """Render storage status and recent activity."""
    st.title("⚙️ Configurações")

    st.markdown("### Armazenamento")
    st.markdown(app.storage_description())

    status = validate_all_settings()
    for name, key in [("Armazenamento", "storage"), ("Aplicativo", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            st.error(f"❌ {name} - {status.get(f'{key}_error', 'Não configurado')}")

    st.markdown("---")
    st.markdown("### Atividade recente")
    events = app.audit_logger.recent_events(limit=20)
    if not events:
        st.info("Nenhuma atividade registrada nesta sessão.")
    for event in events:
        stamp = event.timestamp.astimezone().strftime("%d/%m %H:%M:%S")
        line = f"`{stamp}` {event.description}"
        if event.error_message:
            st.error(f"{line}: {event.error_message}")
        else:
            st.markdown(line)


if __name__ == "__main__":
    main()
