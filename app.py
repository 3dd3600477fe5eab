# MC VOL LAB
# Monte Carlo premium + Implied Volatility calibration dashboard

import logging

import numpy as np
import pandas as pd
import yfinance as yf
import streamlit as st
import matplotlib.pyplot as plt

from mcvol.black_scholes import black_scholes_price
from mcvol.config import CalibrationConfig, SimulationConfig
from mcvol.contract import OptionContract
from mcvol.convergence import convergence_table
from mcvol.implied_vol import calibrate_volatility, on_search_bound
from mcvol.monte_carlo import estimate_premium


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    handlers=[logging.StreamHandler()],
)
logger = logging.getLogger("mcvol.app")


# Helper: estimate annualized volatility from returns

def estimate_annualized_vol(prices: pd.Series) -> float:
    """
    Estimates annualized volatility using daily log returns.
    Assumes ~252 trading days per year.
    """
    log_returns = np.log(prices / prices.shift(1)).dropna()
    daily_vol = log_returns.std()
    return float(daily_vol * np.sqrt(252))


@st.cache_data(ttl=300)
def get_history(ticker: str, period: str):
    """Daily close prices for a ticker."""
    hist = yf.download(ticker, period=period)
    if len(hist) == 0 or "Close" not in hist:
        return pd.Series(dtype=float)
    close = hist["Close"]
    # Newer yfinance returns a one-column frame per ticker
    if isinstance(close, pd.DataFrame):
        close = close.iloc[:, 0]
    return close.dropna()


# Page Configuration
st.set_page_config(page_title="MC Vol Lab", layout="wide", page_icon="📈")

# Session State Initialization
defaults = SimulationConfig()
st.session_state.setdefault("S", 75.576)
st.session_state.setdefault("sigma", 0.20)
st.session_state.setdefault("iv_market_price", 1.298)
st.session_state.setdefault("iv_type", "put")
st.session_state.setdefault("iv_result", None)
st.session_state.setdefault("iv_error", None)


# App Header
st.title("MC Vol Lab 📊")
st.markdown("### Monte Carlo premiums and implied volatility")
st.write("Lognormal paths • Best-average exercise premium • Bisection on σ")

left, right = st.columns([1, 1])


# LEFT SIDE: Market Data

with left:
    st.header("Market Data")

    ticker = st.text_input(
        "Ticker",
        value="AAPL",
        help="Yahoo Finance ticker symbol (e.g., AAPL, TSLA, MSFT)."
    )

    col_a, col_b = st.columns(2)

    with col_a:
        if st.button("Use latest price as S", help="Sets S to the latest Close price for the ticker."):
            close = get_history(ticker, "5d")
            if len(close) > 0:
                st.session_state["S"] = float(close.iloc[-1])
            else:
                st.warning("Could not fetch price for this ticker.")

    with col_b:
        if st.button("Estimate σ from 1Y history", help="Annualized volatility of 1-year daily log returns."):
            close = get_history(ticker, "1y")
            if len(close) > 1:
                st.session_state["sigma"] = estimate_annualized_vol(close)
            else:
                st.warning("Could not fetch enough data to estimate volatility.")

    st.divider()
    st.subheader("Simulation settings")

    simulations_num = st.number_input(
        "Paths (simulations_num)",
        min_value=100,
        value=defaults.simulations_num,
        step=1000,
        help="More paths → lower Monte Carlo noise, slower."
    )

    time_nums = st.number_input(
        "Time steps (time_nums)",
        min_value=1,
        value=defaults.time_nums,
        step=10,
        help="Resolution of the exercise grid {0, dt, ..., T}."
    )

    use_seed = st.checkbox(
        "Fixed seed",
        value=True,
        help="Reuses the same draws for every run (smoother calibration)."
    )
    seed = st.number_input("Seed", min_value=0, value=7, step=1, disabled=not use_seed)

    sim_config = SimulationConfig(
        simulations_num=int(simulations_num),
        time_nums=int(time_nums),
        seed=int(seed) if use_seed else None,
    )


# RIGHT SIDE: Option Pricing

with right:
    st.header("Option Pricing")

    S = st.number_input("Spot (S)", min_value=0.01, value=float(st.session_state["S"]), step=1.0)
    K = st.number_input("Strike (K)", min_value=0.01, value=75.0, step=1.0)
    r = st.number_input("Risk-free rate (r)", value=0.08, step=0.01, format="%.4f")
    sigma = st.number_input(
        "Volatility (σ)",
        min_value=0.0,
        value=float(st.session_state["sigma"]),
        step=0.01,
        help="Annualized volatility in decimals (0.20 = 20%)."
    )
    T = st.number_input(
        "Time to maturity (years)",
        min_value=0.0001,
        value=0.0493,
        step=0.01,
        format="%.4f",
    )

    show_convergence = st.checkbox(
        "Show Monte Carlo convergence",
        value=False,
        help="Spread of repeated estimates for growing path counts."
    )

    if st.button("Price Option (Monte Carlo + Black–Scholes)"):
        try:
            contract = OptionContract(T, S, K, r, sigma)
            premium = estimate_premium(contract, config=sim_config)

            col_call, col_put = st.columns(2)
            with col_call:
                st.subheader("📈 Call")
                st.metric("Monte Carlo (best average)", f"{premium.call:.4f}")
                st.metric("Black–Scholes (reference)", f"{black_scholes_price(contract, 'call'):.4f}")
            with col_put:
                st.subheader("📉 Put")
                st.metric("Monte Carlo (best average)", f"{premium.put:.4f}")
                st.metric("Black–Scholes (reference)", f"{black_scholes_price(contract, 'put'):.4f}")

            st.caption(
                "The Monte Carlo premium is the best average payoff over the exercise grid "
                "and is not discounted, so it can sit above the Black–Scholes price."
            )

            if show_convergence:
                conv_df = convergence_table(
                    contract,
                    simulations_grid=(100, 300, 1000, 3000, 10000),
                    repeats=10,
                    time_nums=int(time_nums),
                    seed=sim_config.seed,
                )

                fig = plt.figure()
                plt.plot(conv_df["simulations"], conv_df["std_call"], marker="o", label="Call")
                plt.plot(conv_df["simulations"], conv_df["std_put"], marker="o", label="Put")
                plt.xlabel("Number of simulations")
                plt.ylabel("Std. dev. across repeated runs")
                plt.title("Monte Carlo Convergence")
                plt.xscale("log")
                plt.legend()
                st.pyplot(fig)

                st.dataframe(conv_df.round(6), use_container_width=True, hide_index=True)

        except ValueError as e:
            st.error(str(e))

    # Implied Volatility

    st.divider()
    st.subheader("Implied Volatility (IV)")
    st.caption("Bisection on σ until the Monte Carlo premium matches the market premium.")

    with st.form("iv_form", clear_on_submit=False):
        market_price = st.number_input(
            "Market option price",
            min_value=0.0,
            value=float(st.session_state["iv_market_price"]),
            step=0.10,
        )
        iv_type = st.selectbox(
            "Option type",
            ["call", "put"],
            index=0 if st.session_state["iv_type"] == "call" else 1,
        )
        tolerance = st.number_input("Tolerance", min_value=1e-8, value=1e-5, format="%.1e")

        submitted = st.form_submit_button("Solve IV")

    st.session_state["iv_market_price"] = float(market_price)
    st.session_state["iv_type"] = iv_type

    calib_config = CalibrationConfig(tolerance=float(tolerance))

    if submitted:
        try:
            with st.spinner("Calibrating..."):
                result = calibrate_volatility(
                    T, S, K, r, iv_type, float(market_price),
                    calibration=calib_config, simulation=sim_config,
                )
            st.session_state["iv_result"] = result
            st.session_state["iv_error"] = None
        except ValueError as e:
            logger.error("calibration failed: %s", e)
            st.session_state["iv_result"] = None
            st.session_state["iv_error"] = str(e)

    if st.session_state["iv_error"]:
        st.error(st.session_state["iv_error"])

    result = st.session_state["iv_result"]
    if result is not None:
        st.success("IV solved ✅")
        st.metric("Implied Volatility (σ)", f"{result.volatility * 100:.4f}%")
        st.write(f"- Iterations: **{result.iterations}** ({result.reason})")
        st.write(f"- Final interval: [{result.low_volatility:.6f}, {result.high_volatility:.6f}]")

        if on_search_bound(result, calib_config):
            st.warning(
                "Result is on the search bound; the market premium is probably outside "
                f"what the model reaches between {calib_config.low_volatility:.0%} "
                f"and {calib_config.high_volatility:.0%} volatility."
            )
