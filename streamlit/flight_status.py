"""
Flight Status - look up a flight and show its route, live position and timings.

Run with: uv run streamlit run streamlit/flight_status.py
"""

from datetime import date

import plotly.graph_objects as go
import streamlit as st

from flightwatch.errors import FlightLookupError
from flightwatch.reference import get_airline
from flightwatch.tracking.delays import (
    calculate_enhanced_flight_duration,
    get_consistent_time_display,
    get_enhanced_time_display,
    get_scheduled_time_for_display,
)
from flightwatch.tracking.models import MISSING_PLACEHOLDER, FlightReport
from flightwatch.tracking.service import FlightStatusService
from flightwatch.tracking.sources.weather import WeatherSource

ROUTE_COLOR = "rgba(100,150,200,0.8)"
PLANE_COLOR = "#D81C1F"

_map_geo_opts = dict(
    scope="world",
    projection_type="natural earth",
    showland=True,
    coastlinewidth=0.5,
    landcolor="rgb(243,243,243)",
    showcountries=True,
    countrycolor="rgba(150,150,150,0.6)",
    countrywidth=0.5,
)


@st.cache_resource
def get_service() -> FlightStatusService:
    return FlightStatusService()


def build_map_figure(report: FlightReport) -> go.Figure | None:
    """Route line, airport markers and the aircraft marker when it is trackable."""
    map_config = report.map_config
    dep = map_config.departure_coords
    arr = map_config.arrival_coords
    if dep is None or arr is None:
        return None

    airports = report.flight.airports
    fig = go.Figure()
    if map_config.show_route:
        fig.add_trace(go.Scattergeo(
            lon=[dep.lng, arr.lng], lat=[dep.lat, arr.lat],
            mode="lines",
            line=dict(width=2, color=ROUTE_COLOR),
            hoverinfo="skip", showlegend=False,
        ))
    fig.add_trace(go.Scattergeo(
        lon=[dep.lng, arr.lng], lat=[dep.lat, arr.lat],
        text=[airports.departure.code, airports.arrival.code],
        mode="markers+text",
        marker=dict(size=10, color="black"),
        textposition="top center",
        hoverinfo="text", showlegend=False,
    ))

    live = map_config.live_position
    if map_config.show_live_position and live is not None:
        angle = live.track_angle if live.track_angle is not None else (live.heading or 0)
        fig.add_trace(go.Scattergeo(
            lon=[live.lng], lat=[live.lat],
            text=[report.flight.flight_number],
            mode="markers",
            marker=dict(size=16, color=PLANE_COLOR, symbol="triangle-up", angle=angle),
            hoverinfo="text", showlegend=False,
        ))

    fig.update_geos(**_map_geo_opts)
    fig.update_geos(fitbounds="locations")
    fig.update_layout(height=500, margin=dict(l=0, r=0, t=0, b=0), showlegend=False)
    return fig


def render_leg(report: FlightReport, leg: str) -> None:
    flight = report.flight
    airport = flight.airport(leg)
    times = flight.leg(leg)

    st.subheader(f"{leg.title()}: {airport.code}")
    st.caption(", ".join(p for p in (airport.name, airport.city) if p))

    props = get_enhanced_time_display(flight, leg)
    scheduled = get_scheduled_time_for_display(flight, leg)
    display = get_consistent_time_display(
        props.display_time, scheduled, props.delay_info.delay_minutes
    )
    if display.show_single_time:
        st.markdown(f"### {display.primary_time or '--:--'}")
    else:
        st.markdown(
            f"### ~~{display.secondary_time}~~ "
            f"<span style='color:{props.time_color}'>{display.primary_time or '--:--'}</span>",
            unsafe_allow_html=True,
        )
    st.markdown(
        f"<span style='color:{props.delay_info.color_tag}'>{props.delay_info.delay_text}</span>",
        unsafe_allow_html=True,
    )

    c1, c2 = st.columns(2)
    with c1:
        st.metric("Terminal", times.terminal or "-")
    with c2:
        st.metric("Gate", times.gate or "-")


def main() -> None:
    st.set_page_config(
        page_title="Flight Status",
        page_icon="✈️",
        layout="wide",
    )
    st.title("✈️ Flight Status")

    with st.sidebar:
        st.header("Search")
        flight_number = st.text_input("Flight number", value="", placeholder="AA176")
        departure_date = st.date_input("Departure date", value=date.today())
        show_weather = st.checkbox("Show airport weather", value=True)

    if not flight_number.strip():
        st.info("Enter a flight number to look it up.")
        return

    try:
        report = get_service().lookup(flight_number, departure_date)
    except FlightLookupError as e:
        st.error(e.user_message)
        return

    flight = report.flight
    airline = get_airline(flight.airline_icao) if flight.airline_icao else None
    st.header(f"{flight.flight_number} · {flight.airline or (airline.name if airline else '')}")
    st.caption(f"{flight.route()} · {flight.aircraft_type or 'Unknown aircraft'}")

    m1, m2, m3 = st.columns(3)
    with m1:
        st.metric("Status", report.status_data.status.value)
    with m2:
        st.metric("Duration", calculate_enhanced_flight_duration(flight) or "-")
    with m3:
        if flight.live_data and report.map_config.show_live_position:
            st.metric("Altitude", f"{flight.live_data.altitude:,.0f} ft")
    st.subheader(report.display.status_message)

    fig = build_map_figure(report)
    if fig is None:
        st.info("No airport coordinates available for this route.")
    else:
        st.plotly_chart(fig, width="stretch")

    col_dep, col_arr = st.columns(2)
    with col_dep:
        render_leg(report, "departure")
    with col_arr:
        render_leg(report, "arrival")

    if show_weather:
        weather = WeatherSource()
        w1, w2 = st.columns(2)
        for col, airport in ((w1, flight.airports.departure), (w2, flight.airports.arrival)):
            report_w = weather.fetch_weather(airport.code)
            with col:
                if report_w is None:
                    st.caption(f"{airport.code}: weather unavailable")
                else:
                    st.metric(
                        f"{airport.code} weather",
                        report_w.formatted_temperature() or "-",
                        help=report_w.phrase,
                    )

    with st.expander("Per-leg table", expanded=False):
        st.dataframe(report.to_dataframe().fillna(MISSING_PLACEHOLDER))


if __name__ == "__main__":
    main()
