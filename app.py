# https://github.com/aimacode/aima-python/blob/master/games4e.py
# https://networkx.org/documentation/stable/reference/classes/digraph.html

import logging
import time

import matplotlib.pyplot as plt
import streamlit as st

from abtutor import config
from abtutor.playback import PlaybackState, Tutor
from abtutor.render import describe_step, draw_tree, fmt_inf
from abtutor.search import minimax_value

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger("abtutor.app")

# =========================
# UI / Layout
# =========================
st.set_page_config(page_title="Alpha-Beta Pruning Practice", layout="wide")

st.markdown(
    """
    <style>
      [data-testid="stAppViewContainer"] > .main .block-container { max-width: 70vw; margin: 0 auto; }
      section.main > div.block-container { max-width: 70vw; margin: 0 auto; }
    </style>
    """,
    unsafe_allow_html=True
)

st.markdown("<h1 style='text-align: center; margin-bottom:0;'>Alpha–Beta Pruning Practice</h1>", unsafe_allow_html=True)
st.caption("Fill in node values and mark pruned edges, check your answer, then step through the search.")

# Session state
if "tutor" not in st.session_state:     st.session_state.tutor = Tutor()
if "use_ab" not in st.session_state:    st.session_state.use_ab = True
if "autoplay" not in st.session_state:  st.session_state.autoplay = False
if "delay_ms" not in st.session_state:  st.session_state.delay_ms = config.DEFAULT_STEP_DELAY_MS
if "correct" not in st.session_state:   st.session_state.correct = None

tutor: Tutor = st.session_state.tutor


def _edge_name(child_id: int) -> str:
    return f"{tutor.tree.edges[child_id].parent}→{child_id}"


def _shape_changed():
    st.session_state.autoplay = False
    st.session_state.correct = None
    st.session_state.pop("bench", None)


tab_practice, tab_bench = st.tabs(["Practice", "Benchmark"])

# ---- TAB 1: practice + playback ----
with tab_practice:
    mode = st.radio("Bounds", ["αβ", "Cutoff"], horizontal=True,
                    index=0 if st.session_state.use_ab else 1)
    st.session_state.use_ab = (mode == "αβ")

    col_tree, col_ctrl = st.columns([2.2, 1])

    with col_ctrl:
        playing = tutor.playing
        if st.button(("Stop" if playing else "Start") + " Animation", use_container_width=True):
            tutor.toggle_playback()
            st.session_state.autoplay = False
            st.session_state.correct = None
            st.rerun()

        if playing:
            p1, p2, p3, p4, p5, p6 = st.columns(6)
            if p1.button("⏵", use_container_width=True):
                st.session_state.autoplay = True
            if p2.button("⏸", use_container_width=True):
                st.session_state.autoplay = False
            if p3.button("⏪", use_container_width=True):
                tutor.step_backward()
            if p4.button("⏩", use_container_width=True):
                tutor.step_forward()
            if p5.button("⏮", use_container_width=True):
                tutor.go_to_beginning()
            if p6.button("⏭", use_container_width=True):
                tutor.go_to_end()
            st.progress(tutor.progress)
            st.session_state.delay_ms = st.slider(
                "Step delay (ms)", config.MIN_STEP_DELAY_MS, config.MAX_STEP_DELAY_MS,
                st.session_state.delay_ms, step=25)
            st.write(f"Step {tutor.queue.last_action + 1} / {len(tutor.queue)}")
        else:
            st.divider()
            d1, d2, d3 = st.columns([1.4, 1, 1])
            d1.write(f"Depth: **{tutor.tree.depth}**")
            if d2.button("−", key="depth_dec", use_container_width=True):
                tutor.change_depth(-1); _shape_changed(); st.rerun()
            if d3.button("+", key="depth_inc", use_container_width=True):
                tutor.change_depth(1); _shape_changed(); st.rerun()
            b1, b2, b3 = st.columns([1.4, 1, 1])
            b1.write(f"Branching: **{tutor.tree.branching_factor}**")
            if b2.button("−", key="bf_dec", use_container_width=True):
                tutor.change_branching_factor(-1); _shape_changed(); st.rerun()
            if b3.button("+", key="bf_inc", use_container_width=True):
                tutor.change_branching_factor(1); _shape_changed(); st.rerun()
            st.divider()
            s1, s2, s3 = st.columns(3)
            if s1.button("Swap Min/Max", use_container_width=True):
                tutor.flip_kind(); _shape_changed(); st.rerun()
            if s2.button("Regenerate", use_container_width=True):
                tutor.regenerate(); _shape_changed(); st.rerun()
            if s3.button("Sample tree", use_container_width=True):
                tutor.load_sample(); _shape_changed(); st.rerun()
            r1, r2, r3 = st.columns(3)
            if r1.button("Reset Tree", use_container_width=True):
                tutor.reset(); st.session_state.correct = None
            if r2.button("Show Solution", use_container_width=True):
                tutor.show_solution()
            if r3.button("Check Answer", use_container_width=True):
                st.session_state.correct = tutor.check_answer()

            if st.session_state.correct is None:
                st.write("--")
            elif st.session_state.correct:
                st.success("Correct!")
            else:
                st.error("Incorrect")

            with st.expander("Your answers", expanded=True):
                st.caption("Leave a value blank for nodes the search never reaches.")
                for node in tutor.tree.walk():
                    if node.is_leaf:
                        continue
                    shown = fmt_inf(node.value) if node.value is not None else ""
                    text = st.text_input(f"{node.kind.value} node {node.id}", shown,
                                         key=f"val_{node.id}_{shown}")
                    if text != shown and tutor.set_value_text(node.id, text):
                        st.rerun()
                all_edges = list(tutor.tree.edges)
                marked = [c for c in all_edges if tutor.tree.edges[c].pruned]
                chosen = st.multiselect("Pruned edges", all_edges, default=marked,
                                        format_func=_edge_name)
                if set(chosen) != set(marked):
                    for c in set(chosen) ^ set(marked):
                        tutor.toggle_edge(c)
                    st.rerun()

    with col_tree:
        title = "α–β" if st.session_state.use_ab else "Cutoff"
        if tutor.playing:
            title += f" — Step {tutor.queue.last_action + 1}"
        fig = draw_tree(tutor.tree, use_ab=st.session_state.use_ab, title=title)
        st.pyplot(fig, use_container_width=True)
        plt.close(fig)
        st.caption("Nodes are pruned when " + ("β ≤ α." if st.session_state.use_ab
                                                else "the value is in the cutoff range."))

        if tutor.playing:
            with st.expander("What is happening in this step?", expanded=True):
                lines = describe_step(tutor.tree, tutor.queue.current_step())
                st.write("\n".join(f"- {ln}" for ln in lines) if lines else "Press ⏩ to begin.")

        with st.expander("Legend"):
            st.markdown(
                "**Shapes:** ▲ = MAX, ▼ = MIN, ■ = leaf.\n\n"
                "**Colors:** Yellow=current, Green=has a value, Blue=untouched, Grey=pruned."
            )

# ---- TAB 2: Minimax vs Alpha–Beta ----
with tab_bench:
    st.markdown("### Benchmark: Minimax vs Alpha–Beta on this tree")
    if st.button("Run benchmark", key="btn_bench"):
        tutor.ensure_queue()
        v1, mm = minimax_value(tutor.tree)
        st.session_state.bench = {"mm": (v1, mm), "ab": (tutor.tree.solution.node(tutor.tree.root_id).value, tutor.stats)}
    if "bench" in st.session_state:
        (v1, mm), (v2, abm) = st.session_state.bench["mm"], st.session_state.bench["ab"]
        c1, c2 = st.columns(2)
        with c1:
            st.markdown("**Minimax (no pruning)**")
            st.write(f"Value: {fmt_inf(v1)}")
            st.write(f"Visited: {mm.visited:,} | Prunes: {mm.prunes:,}")
            st.write(f"Time: {mm.time_s*1000:.2f} ms")
        with c2:
            st.markdown("**Alpha–Beta**")
            st.write(f"Value: {fmt_inf(v2)}")
            st.write(f"Visited: {abm.visited:,} | Prunes: {abm.prunes:,}")
            st.write(f"Time: {abm.time_s*1000:.2f} ms")

# auto-play: one step per rerun until the log runs out or the user pauses
if tutor.state is PlaybackState.PLAYING and st.session_state.autoplay:
    time.sleep(st.session_state.delay_ms / 1000.0)
    if tutor.step_forward():
        st.rerun()
    else:
        st.session_state.autoplay = False
        logger.info("Auto-play reached the end of the log")
        st.rerun()
