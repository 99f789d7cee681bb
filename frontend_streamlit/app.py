import streamlit as st
from utils.api_client import get, post
from utils.schedule_table import build_payload, schedule_rows

st.set_page_config(page_title="Prescription Schedule", layout="centered")

st.title("Prescription Schedule")

form_resp = get("/prescriptions/form")
if form_resp.status_code != 200:
    st.error("Failed to load prescription form")
    st.stop()

form_meta = form_resp.json()
day_labels = {opt["value"]: opt["label"] for opt in form_meta["daysOfWeek"]}
regimen_kinds = [opt["value"] for opt in form_meta["regimenKinds"]]
max_dose = float(form_meta["maxDose"])
defaults = form_meta["defaults"]

days_of_week = st.multiselect(
    "Pickup days",
    options=list(day_labels),
    default=defaults["daysOfWeek"],
    format_func=lambda value: day_labels[value],
)
regimen_kind = st.selectbox(
    "Prescription type",
    options=regimen_kinds,
    index=regimen_kinds.index(defaults["regimenKind"]),
)

with st.form("prescription"):
    if regimen_kind == "Stabilisation":
        dosage = st.number_input("Dosage (mL)", min_value=0.0, max_value=max_dose, value=None)
        payload = build_payload(days_of_week, regimen_kind, dosage=dosage)
    else:
        initial_daily_dose = st.number_input(
            "Initial daily dose (mL)", min_value=0.0, max_value=max_dose, value=None
        )
        change_frequency_days = st.number_input(
            "Change frequency (days)", min_value=1, step=1, value=None
        )
        change_amount = st.number_input(
            "Change amount (mL)", min_value=0.0, max_value=max_dose, value=None
        )
        payload = build_payload(
            days_of_week,
            regimen_kind,
            initial_daily_dose=initial_daily_dose,
            change_frequency_days=change_frequency_days,
            change_amount=change_amount,
        )
    submitted = st.form_submit_button("Generate Schedule")

if submitted:
    resp = post("/schedules", payload)
    if resp.status_code == 422:
        detail = resp.json().get("detail", [])
        for violation in detail:
            if isinstance(violation, dict):
                st.error(violation.get("message") or violation.get("msg"))
            else:
                st.error(violation)
        st.stop()
    if resp.status_code != 200:
        st.error(f"Failed to generate schedule: {resp.text}")
        st.stop()

    data = resp.json()
    for holiday in data.get("holidays", []):
        st.info(f"No pickups on {holiday['date']} ({holiday['name']})")

    st.subheader("Schedule")
    st.dataframe(schedule_rows(data["days"]), use_container_width=True, hide_index=True)
    st.caption(f"{data['pickupCount']} pickups, {data['totalDose']:g} mL in total")
