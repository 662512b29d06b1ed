"""
UI layer
Purpose: Streamlit-only glue. Renders widgets/tabs, collects user inputs, and delegates
all work to the controller. Keeps UI concerns (layout/state widgets) separate from
business logic so logic can be unit tested without Streamlit.
"""

import hashlib
import logging

import streamlit as st
from audio_recorder_streamlit import audio_recorder

from renal_aid.config import configure_logging, load_settings
from renal_aid.controller import DecisionAidSessionController
from renal_aid.data.comparison import (
    COMPARE_CATEGORIES,
    COMPARE_TREATMENTS,
    rows_in_category,
)
from renal_aid.data.family import FAMILY_ROLES, PromptCategory
from renal_aid.data.goals import GOAL_CATEGORIES, TREATMENT_DISPLAY, goals_in_category
from renal_aid.data.journey import JOURNEY_STAGES
from renal_aid.data.questionnaire import (
    QUESTIONNAIRE_QUESTIONS,
    QuestionType,
    calculate_progress,
    collect_answers,
    get_question_by_id,
)
from renal_aid.data.support_networks import (
    SUPPORT_NETWORKS,
    SupportFilter,
    filter_support_networks,
    search_support_networks,
    split_by_scope,
)
from renal_aid.data.statistics import (
    DATA_SOURCES,
    INCIDENT_DATA,
    OVERALL_ABSOLUTE_NUMBERS,
    TOTAL_PATIENTS_ON_RRT,
)
from renal_aid.data.treatments import COMPARISON_CATEGORIES, get_all_treatments, get_treatment_by_id
from renal_aid.data.values import (
    NOT_RATED,
    NOT_RATED_LABEL_KEY,
    RATING_LABEL_KEYS,
    VALUE_STATEMENTS,
    ratings_from_form,
    top_priorities,
)
from renal_aid.errors import SessionNotFoundError
from renal_aid.i18n import (
    LANGUAGE_STORAGE_KEY,
    SUPPORTED_LANGUAGES,
    HttpBackend,
    Translator,
    initial_language,
)
from renal_aid.models import (
    CarerRelationship,
    JournalCategory,
    JourneyStage,
    UserRole,
    ValueCategory,
)
from renal_aid.persistence.session_store import InMemorySessionStore
from renal_aid.services.compatibility import (
    calculate_value_match_scores,
    compatibility_label_key,
    filter_rows,
    get_discussion_prompts,
    get_treatment_matches,
    is_row_highlighted,
    match_badge_key,
    recommended_treatment,
    toggle_visible_treatment,
)
from renal_aid.services.decision import (
    QUESTION_CATEGORIES,
    calculate_readiness,
    custom_question,
    family_prompts,
    generate_questions,
    group_prompts_by_category,
)
from renal_aid.services.journal import (
    CATEGORY_ICONS,
    category_label_key,
    filter_entries,
    journal_stats,
)
from renal_aid.services.llm_openai import OpenAILLMClient, describe_openai_error
from renal_aid.services.statistics import (
    build_profile_from_session,
    get_personalized_statistics,
)
from renal_aid.services.summary import render_summary_markdown
from renal_aid.services.voice import autoplay_html

logger = logging.getLogger("renal_aid.app")

# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="Kidney Treatment Decision Aid",
    page_icon="🩺",
    layout="wide",
    initial_sidebar_state="expanded",
)

settings = load_settings()
configure_logging(settings.log_level)


@st.cache_resource
def get_session_store() -> InMemorySessionStore:
    """One store per server process, shared by every browser tab."""
    return InMemorySessionStore(ttl_seconds=settings.session_duration_seconds)


def make_translator() -> Translator:
    backend = HttpBackend(settings.locales_url) if settings.locales_url else None
    return Translator(backend)


def make_llm(api_key):
    if not api_key:
        return None
    try:
        return OpenAILLMClient(api_key=api_key)
    except RuntimeError as e:
        st.toast(f"OpenAI init failed: {e}", icon="⚠️")
        return None


store = get_session_store()
store.cleanup()

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
if st_session.get("controller") is None:
    st_session.controller = DecisionAidSessionController(
        make_llm(settings.openai_api_key),
        store=store,
        translator=make_translator(),
        settings=settings,
    )
    st_session.controller.set_language(
        initial_language(st.query_params.get(LANGUAGE_STORAGE_KEY))
    )
st_session.setdefault("api_key_set", settings.has_api_key)
st_session.setdefault("speak_replies", False)
st_session.setdefault("voice_mode", False)
st_session.setdefault("last_voice_sig", None)
st_session.setdefault("tts_text_queue", [])
st_session.setdefault("tts_audio_queue", [])
st_session.setdefault("question_choices", {})
st_session.setdefault("custom_questions", [])
st_session.setdefault("value_filters", [])
st_session.setdefault("visible_treatments", list(COMPARE_TREATMENTS))
st_session.setdefault("family_role", FAMILY_ROLES[0].id)

controller: DecisionAidSessionController = st_session.controller
t = controller.translator.t


# ---------------------------
# Helpers
# ---------------------------
def apply_direction_css():
    """Right-to-left layout and script fonts for the active language."""
    direction = controller.translator.direction
    font = controller.translator.font_family
    st.markdown(
        f"""
        <style>
        .stApp, .stMarkdown, .stChatMessage {{ direction: {direction}; font-family: {font}; }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def on_language_change():
    code = st_session.language_select
    if not controller.set_language(code):
        st.toast(t("errors.languageFallback", "Could not load that language, showing English."), icon="⚠️")
    st.query_params[LANGUAGE_STORAGE_KEY] = controller.translator.language


def reset_ui_state():
    """Forget per-session widget state after the session ends."""
    st_session.tts_text_queue = []
    st_session.tts_audio_queue = []
    st_session.question_choices = {}
    st_session.custom_questions = []
    st_session.value_filters = []
    st_session.visible_treatments = list(COMPARE_TREATMENTS)
    st_session.last_voice_sig = None
    st_session.pop("treatment_pick", None)


def current_questions():
    """Generated questions with the user's selections applied, then custom ones."""
    questions = generate_questions(controller.session)
    for q in questions:
        q.is_selected = st_session.question_choices.get(q.id, q.is_selected)
    return questions + st_session.custom_questions


def treatment_title(treatment) -> str:
    info = get_treatment_by_id(treatment)
    return t(info.title_key) if info else str(treatment)


def rating_label(rating) -> str:
    if rating == NOT_RATED:
        return t(NOT_RATED_LABEL_KEY, "Not rated yet")
    return t(RATING_LABEL_KEYS[rating])


@st.fragment(run_every="1s")
def session_countdown():
    """Sidebar countdown; reruns on its own every second so idle users see it move."""
    if controller.check_expiry():
        reset_ui_state()
        st.rerun(scope="app")
    timer = controller.timer()
    if timer is None:
        return
    st.metric(t("session.timeRemaining", "Time remaining"), timer.formatted)
    if timer.is_warning:
        st.warning(t("session.expiryWarning", "Your session will end soon."))


def journal_category_label(category) -> str:
    return f"{CATEGORY_ICONS[JournalCategory(category)]} {t(category_label_key(category))}"


def render_treatment(info):
    st.markdown(f"### {t(info.title_key)}")
    st.markdown(f"*{t(info.short_description_key)}*")
    st.markdown(t(info.description_key))
    bcol, ccol = st.columns(2)
    with bcol:
        st.markdown(f"**{t('treatments.benefits', 'Benefits')}**")
        st.markdown("\n".join(f"- {t(k)}" for k in info.benefits_keys))
    with ccol:
        st.markdown(f"**{t('treatments.considerations', 'Things to consider')}**")
        st.markdown("\n".join(f"- {t(k)}" for k in info.considerations_keys))
    if info.learn_more_url:
        st.link_button(t("treatments.learnMore", "Learn more on NHS.uk"), info.learn_more_url)


# ---------------------------
# Expiry check (every rerun)
# ---------------------------
if controller.check_expiry():
    reset_ui_state()

apply_direction_css()

# ---------------------------
# SIDEBAR: language, session, role, API key
# ---------------------------
with st.sidebar:
    st.markdown(f"# {t('app.title', 'Kidney Treatment Decision Aid')}")

    codes = list(SUPPORTED_LANGUAGES.keys())
    st.selectbox(
        t("language.select", "Language"),
        codes,
        index=codes.index(controller.translator.language),
        format_func=lambda c: f"{SUPPORTED_LANGUAGES[c].native_name} ({SUPPORTED_LANGUAGES[c].name})",
        key="language_select",
        on_change=on_language_change,
    )
    st.divider()

    if controller.session is not None:
        st.markdown(f"## {t('session.title', 'Your session')}")
        session_countdown()
        col1, col2 = st.columns(2)
        if col1.button(t("session.extend", "Extend"), use_container_width=True):
            controller.extend_session()
            st.rerun()
        if col2.button(t("session.end", "End session"), use_container_width=True):
            controller.end_session()
            reset_ui_state()
            st.rerun()
        st.caption(t("session.privacyNote", "Nothing you enter is stored after your session ends."))
        st.divider()

        st.markdown(f"## {t('role.title', 'Who is using this aid?')}")
        roles = [UserRole.PATIENT.value, UserRole.CARER.value]
        role = st.radio(
            t("role.label", "I am"),
            roles,
            index=roles.index(controller.session.user_role.value),
            format_func=lambda r: t(f"role.{r}", r),
        )
        relationship = None
        if role == UserRole.CARER.value:
            rels = [r.value for r in CarerRelationship]
            current = controller.session.carer_relationship
            relationship = st.selectbox(
                t("role.relationship", "Your relationship to them"),
                rels,
                index=rels.index(current.value) if current else 0,
                format_func=lambda r: t(f"role.relationships.{r}", r),
            )
        if role != controller.session.user_role.value or (
            relationship is not None
            and relationship != getattr(controller.session.carer_relationship, "value", None)
        ):
            controller.set_user_role(role, relationship)
        st.divider()

    st.markdown(f"## {t('assistant.apiKeyTitle', 'AI assistant (optional)')}")
    user_api_key = st.text_input(
        t("assistant.apiKeyLabel", "OpenAI API key"),
        type="password",
        help=t("assistant.apiKeyHelp", "We do not store your key. It stays in your session only."),
    )
    if user_api_key and not st_session.api_key_set:
        llm = make_llm(user_api_key)
        if llm is not None:
            controller.llm = llm
            st_session.api_key_set = True
            st.toast(t("assistant.apiKeySet", "AI assistant enabled."))
    if not controller.has_ai():
        st.caption(t("assistant.fallbackNote", "Without a key the assistant gives general answers only."))

# ---------------------------
# Landing: no session yet
# ---------------------------
if controller.session is None:
    st.title(t("landing.title", "Kidney Treatment Decision Aid"))
    if controller.error:
        st.warning(controller.error)
    st.markdown(t("landing.intro"))
    st.info(t("landing.privacy", "This tool does not store personal information."))
    if st.button(t("landing.start", "Start"), type="primary"):
        controller.clear_error()
        controller.create_session(controller.translator.language)
        st.rerun()
    st.stop()

session = controller.session

# ---------------------------
# Main tabs
# ---------------------------
(
    journey_tab,
    treatments_tab,
    questionnaire_tab,
    values_tab,
    goals_tab,
    compare_tab,
    statistics_tab,
    support_tab,
    chat_tab,
    summary_tab,
) = st.tabs(
    [
        t("nav.journey", "Your journey"),
        t("nav.treatments", "Treatments"),
        t("nav.questionnaire", "About you"),
        t("nav.values", "What matters"),
        t("nav.lifeGoals", "Life goals"),
        t("nav.compare", "Compare"),
        t("nav.statistics", "Statistics"),
        t("nav.support", "Support"),
        t("nav.chat", "Ask a question"),
        t("nav.summary", "Summary"),
    ]
)

with journey_tab:
    st.subheader(t("journey.title", "Where are you in your kidney journey?"))
    st.caption(t("journey.subtitle"))
    stage_ids = [s.id.value for s in JOURNEY_STAGES]
    titles = {s.id.value: s for s in JOURNEY_STAGES}
    current = session.journey_stage.value if session.journey_stage else None
    choice = st.radio(
        t("journey.select", "Choose the stage that fits best"),
        stage_ids,
        index=stage_ids.index(current) if current else None,
        format_func=lambda s: t(titles[s].title_key),
    )
    if choice:
        st.caption(t(titles[choice].description_key))
        if choice != current:
            controller.set_journey_stage(JourneyStage(choice))
            st.rerun()

with treatments_tab:
    treatments = get_all_treatments()
    st.subheader(t("treatments.title", "Treatment options"))
    slugs = [info.id.value for info in treatments]
    picked = st.radio(
        t("treatments.select", "Choose a treatment to read about"),
        slugs,
        index=None,
        horizontal=True,
        format_func=treatment_title,
        key="treatment_pick",
    )
    info = get_treatment_by_id(picked) if picked else None
    if info is None:
        st.info(t("treatments.pickPrompt", "Choose a treatment above to read more about it."))
    else:
        controller.mark_treatment_viewed(info.id)
        render_treatment(info)

    st.divider()
    st.markdown(f"#### {t('comparison.title', 'Quick comparison')}")
    for category in COMPARISON_CATEGORIES:
        header = "| | " + " | ".join(treatment_title(tr.id) for tr in treatments) + " |"
        sep = "|---" * (len(treatments) + 1) + "|"
        rows = [
            f"| {t(item.label_key)} | "
            + " | ".join(t(item.values[tr.id]) for tr in treatments)
            + " |"
            for item in category.items
        ]
        st.markdown(f"**{t(category.title_key)}**")
        st.markdown("\n".join([header, sep, *rows]))

with questionnaire_tab:
    st.subheader(t("questionnaire.title", "About you"))
    st.caption(t("questionnaire.subtitle"))
    answered = sum(1 for q in QUESTIONNAIRE_QUESTIONS if session.answer_for(q.id))
    if answered:
        st.progress(
            calculate_progress(answered - 1) / 100,
            text=t("questionnaire.progress", "{{done}} of {{total}} answered", done=answered, total=len(QUESTIONNAIRE_QUESTIONS)),
        )
    with st.form("questionnaire_form"):
        drafts = {}
        for q in QUESTIONNAIRE_QUESTIONS:
            existing = session.answer_for(q.id)
            labels = {o.value: t(o.label_key) for o in q.options}
            help_text = t(q.help_text_key) if q.help_text_key else None
            if q.type == QuestionType.SINGLE_CHOICE:
                values = q.option_values()
                drafts[q.id] = st.radio(
                    t(q.title_key),
                    values,
                    index=values.index(existing.value) if existing else None,
                    format_func=labels.get,
                    help=help_text,
                )
            else:
                drafts[q.id] = st.multiselect(
                    t(q.title_key),
                    q.option_values(),
                    default=existing.value if existing else [],
                    format_func=labels.get,
                    help=help_text,
                )
            st.caption(t(q.description_key))
        saved = st.form_submit_button(t("questionnaire.save", "Save answers"), type="primary")
    if saved:
        answers, problems = collect_answers(drafts)
        for answer in answers:
            controller.add_questionnaire_answer(answer)
        if problems:
            missing = ", ".join(t(get_question_by_id(qid).title_key) for qid in problems)
            st.toast(
                f"{t('questionnaire.incomplete', 'Some required questions are not answered yet.')} "
                f"{t('questionnaire.missing', questions=missing)}",
                icon="⚠️",
            )
        else:
            st.toast(t("questionnaire.saved", "Answers saved."))
        st.rerun()

with values_tab:
    st.subheader(t("values.title", "What matters to you?"))
    st.caption(t("values.subtitle"))
    with st.form("values_form"):
        draft_ratings = {}
        for statement in VALUE_STATEMENTS:
            draft_ratings[statement.id] = st.select_slider(
                t(statement.text_key),
                options=[NOT_RATED, *RATING_LABEL_KEYS],
                value=session.rating_for(statement.id) or NOT_RATED,
                format_func=rating_label,
            )
        saved = st.form_submit_button(t("values.save", "Save my ratings"), type="primary")
    if saved:
        try:
            for rating in ratings_from_form(draft_ratings):
                controller.add_value_rating(rating)
            st.toast(t("values.saved", "Ratings saved."))
        except ValueError as e:
            st.toast(f"{e}", icon="⚠️")
        st.rerun()

    top = top_priorities(session.value_ratings)
    if top:
        st.markdown(f"#### {t('values.topPriorities', 'Your top priorities')}")
        for r in top:
            statement = next(s for s in VALUE_STATEMENTS if s.id == r.statement_id)
            st.markdown(f"- {t(statement.text_key)} ({t(RATING_LABEL_KEYS[r.rating])})")

with goals_tab:
    st.subheader(t("lifeGoals.title", "Your life goals"))
    st.caption(t("lifeGoals.subtitle"))
    selected = set(session.selected_goals)
    for category in GOAL_CATEGORIES:
        with st.expander(f"{category.icon} {t(category.title_key)}"):
            st.caption(t(category.description_key))
            for goal in goals_in_category(category.id):
                checked = st.checkbox(t(goal.label_key), value=goal.id in selected, key=f"goal_{goal.id}")
                if checked != (goal.id in selected):
                    controller.toggle_goal(goal.id)
                    st.rerun()

    if session.selected_goals:
        st.markdown(f"#### {t('lifeGoals.results.title', 'How treatments fit your goals')}")
        for match in get_treatment_matches(session.selected_goals):
            label = t(TREATMENT_DISPLAY[match.treatment]["label_key"])
            badge = f" ⭐ {t('lifeGoals.results.bestMatch', 'Best match')}" if match.is_best_match else ""
            st.markdown(f"**{label}**{badge} · {t(compatibility_label_key(match.score))}")
            st.progress(match.score / 100, text=f"{match.score}%")
            if match.strengths:
                st.markdown("\n".join(f"- ✅ {t(k)}" for k in match.strengths))
            if match.challenges:
                st.markdown("\n".join(f"- ⚠️ {t(k)}" for k in match.challenges))
        st.markdown(f"#### {t('lifeGoals.discussion.title', 'Things to talk about with your team')}")
        st.markdown("\n".join(f"- {t(k)}" for k in get_discussion_prompts(session.selected_goals)))
    else:
        st.info(t("lifeGoals.empty", "Choose a few goals to see how each treatment fits."))

with compare_tab:
    st.subheader(t("compare.title", "Compare treatments side by side"))
    st.caption(t("compare.subtitle"))

    st_session.value_filters = st.multiselect(
        t("compare.filterLabel", "Show what matters most to me"),
        [c.value for c in ValueCategory],
        default=st_session.value_filters,
        format_func=lambda c: t(f"compare.filters.{c}", c),
    )
    fcols = st.columns(len(COMPARE_TREATMENTS))
    for col, treatment in zip(fcols, COMPARE_TREATMENTS):
        shown = treatment in st_session.visible_treatments
        if col.checkbox(treatment_title(treatment), value=shown, key=f"show_{treatment.value}") != shown:
            st_session.visible_treatments = toggle_visible_treatment(
                st_session.visible_treatments, treatment
            )
            st.rerun()

    visible = st_session.visible_treatments
    filtered = filter_rows([ValueCategory(c) for c in st_session.value_filters])
    for category in COMPARE_CATEGORIES:
        rows = [r for r in rows_in_category(category.id) if r in filtered]
        if not rows:
            continue
        st.markdown(f"**{t(category.title_key)}**")
        header = "| | " + " | ".join(treatment_title(tr) for tr in visible) + " |"
        sep = "|---" * (len(visible) + 1) + "|"
        lines = [header, sep]
        for row in rows:
            mark = "★ " if is_row_highlighted(row, session.value_ratings) else ""
            cells = [
                f"{t(row.values[tr].text_key)}<br><small>{t(row.values[tr].subtext_key)}</small>"
                for tr in visible
            ]
            lines.append(f"| {mark}{t(row.criteria_key)} | " + " | ".join(cells) + " |")
        st.markdown("\n".join(lines), unsafe_allow_html=True)
    st.caption(t("compare.highlightNote", "★ marks rows linked to values you rated important."))

    if session.value_ratings:
        scores = calculate_value_match_scores(session.value_ratings)
        st.markdown(f"#### {t('compare.valueMatch.title', 'How treatments match your values')}")
        best = recommended_treatment(scores)
        for treatment, score in scores.items():
            badge_key = match_badge_key(score)
            badge = f" · {t(badge_key)}" if badge_key else ""
            st.progress(score / 100, text=f"{treatment_title(treatment)}: {score}%{badge}")
        if best is not None:
            st.success(t("compare.valueMatch.recommended", "Closest to your values: {{treatment}}", treatment=treatment_title(best)))
        st.caption(t("compare.valueMatch.disclaimer", "This is not medical advice."))
    else:
        st.info(t("compare.valueMatch.empty", "Rate what matters to you to see a personal match."))

with statistics_tab:
    st.subheader(t("statistics.title", "What other people chose"))
    profile = build_profile_from_session(session.questionnaire_answers, session.journey_stage)
    stats = get_personalized_statistics(profile)
    st.caption(t(stats.personalization_basis_key))
    st.metric(t("statistics.totalPatients", "People on kidney replacement therapy in the UK"), f"{TOTAL_PATIENTS_ON_RRT:,}")
    for modality, pct in stats.modality_breakdown.as_dict().items():
        st.progress(pct / 100, text=f"{t(f'statistics.modalities.{modality}', modality)}: {pct}%")
    with st.expander(t("statistics.absolute.title", "Across the whole UK")):
        for modality, count in OVERALL_ABSOLUTE_NUMBERS.items():
            st.markdown(f"- **{t(f'statistics.modalities.{modality}', modality)}**: {count:,}")
        st.caption(
            t(
                "statistics.absolute.newPatients",
                new=f"{INCIDENT_DATA['new_patients_per_year']:,}",
                conservative=INCIDENT_DATA["conservative_management_rate"],
            )
        )

    for insight in stats.insights:
        show = st.success if insight.type == "positive" else st.info
        show(f"**{t(insight.title_key)}**  \n{t(insight.description_key)}")

    st.markdown(f"#### {t('statistics.waitingList.title', 'Transplant waiting list')}")
    wl = stats.waiting_list
    c1, c2, c3 = st.columns(3)
    c1.metric(t("statistics.waitingList.onList", "People waiting"), f"{wl.total_on_list:,}")
    c2.metric(t("statistics.waitingList.perYear", "Transplants per year"), f"{wl.transplants_per_year:,}")
    c3.metric(t("statistics.waitingList.medianWait", "Typical wait (years)"), wl.median_wait_years)

    st.markdown(f"#### {t('statistics.qol.title', 'Quality of life')}")
    for qol in stats.quality_of_life:
        st.markdown(
            f"**{t(f'statistics.modalities.{qol.modality.value}')}**: "
            f"{qol.overall_score}/10 · {t(qol.description_key)}"
        )

    st.markdown(f"#### {t('statistics.survival.title', 'Survival')}")
    for item in stats.survival:
        figure = f"{item.five_year_survival}%" if item.five_year_survival else item.median_survival
        st.markdown(f"- **{t(f'statistics.modalities.{item.modality.value}')}**: {figure} · {t(item.context_key)}")

    st.caption(t("statistics.disclaimer", "Figures describe groups of people, not you."))
    st.caption(" · ".join(f"{t(src.name_key)} ({src.year})" for src in DATA_SOURCES))

with support_tab:
    st.subheader(t("supportNetworks.title", "Support Networks"))
    st.caption(t("supportNetworks.subtitle"))
    query = st.text_input(
        t("supportNetworks.searchLabel", "Search for support in your area"),
        placeholder=t("supportNetworks.searchPlaceholder"),
        key="support_query",
    )
    support_filter = st.radio(
        t("supportNetworks.filterLabel", "Show"),
        [f.value for f in SupportFilter],
        horizontal=True,
        format_func=lambda f: t(f"supportNetworks.filters.{f}", f),
        key="support_filter",
    )
    results = search_support_networks(query) if query.strip() else list(SUPPORT_NETWORKS)
    results = filter_support_networks(results, support_filter)
    if query.strip():
        if results:
            st.caption(t("supportNetworks.showingResults", count=len(results), query=query.strip()))
        else:
            st.warning(t("supportNetworks.noResults", query=query.strip()))
            st.caption(t("supportNetworks.noResultsHint"))
    elif not results:
        st.info(t("supportNetworks.noResultsFilter", "No support networks found for this filter."))

    national, regional = split_by_scope(results)
    for heading_key, group in (("supportNetworks.national", national), ("supportNetworks.regional", regional)):
        if not group:
            continue
        st.markdown(f"#### {t(heading_key)}")
        for network in group:
            with st.container(border=True):
                badges = [t(network.type_label_key)]
                if network.for_carers and not network.for_patients:
                    badges.append(t("supportNetworks.forCarers", "For carers"))
                st.markdown(f"**{network.name}** · " + " · ".join(badges))
                st.caption(network.description)
                st.markdown(f"*{t('supportNetworks.services', 'Services offered')}*: " + ", ".join(network.services))
                if network.phone:
                    st.markdown(f"📞 {t('supportNetworks.phone', 'Phone')}: {network.phone}")
                st.link_button(t("supportNetworks.visitWebsite", "Visit Website"), network.website)

with chat_tab:
    st.subheader(t("chat.title", "Ask a question"))
    st.caption(t("chat.disclaimer", "This assistant does not give medical advice."))

    vcol1, vcol2 = st.columns([1, 1])
    with vcol1:
        st_session.voice_mode = st.toggle(
            f"🎙️ {t('chat.voiceMode', 'Voice mode')}",
            value=st_session.voice_mode,
            disabled=not controller.has_ai(),
        )
    with vcol2:
        st_session.speak_replies = st.toggle(
            f"🔊 {t('chat.speakReplies', 'Read answers aloud')}",
            value=st_session.speak_replies,
            disabled=not controller.has_ai(),
        )

    if st_session.tts_audio_queue:
        mp3 = st_session.tts_audio_queue.pop(0)
        st.html(autoplay_html(mp3))

    if controller.has_ai() and st_session.speak_replies and st_session.tts_text_queue:
        next_text = st_session.tts_text_queue.pop(0)
        with st.spinner(t("chat.preparingAudio", "Preparing audio…")):
            try:
                audio_bytes, _tts_meta = controller.speak(next_text)
                if audio_bytes:
                    st_session.tts_audio_queue.append(audio_bytes)
                    st.rerun()
            except Exception as e:
                st.toast(f"{t('chat.ttsFailed', 'Audio failed')}: {describe_openai_error(e)}", icon="⚠️")

    transcript = st.container(height=450, border=True)
    with transcript:
        if not session.chat_history:
            st.markdown(t("chat.welcome", "Hello! Ask me anything about kidney treatment options."))
        for msg in session.chat_history:
            with st.chat_message(msg.role.value):
                st.markdown(msg.content)

    user_text = None
    if st_session.voice_mode:
        wav_bytes = audio_recorder(
            pause_threshold=2,
            sample_rate=16_000,
            text=t("chat.pressToRecord", "Press to record"),
            icon_size="2x",
        )
        if wav_bytes:
            sig = hashlib.sha1(wav_bytes).hexdigest()
            if sig != st_session.get("last_voice_sig"):
                st_session.last_voice_sig = sig
                try:
                    with st.spinner(t("chat.transcribing", "Transcribing…")):
                        user_text = controller.voice_to_text(wav_bytes)
                except ValueError as e:
                    st.toast(f"{e}", icon="⚠️")
                except Exception as e:
                    st.toast(f"{t('chat.sttFailed', 'Transcription failed')}: {describe_openai_error(e)}", icon="⚠️")
    else:
        raw = st.chat_input(t("chat.placeholder", "Type your question…"))
        if raw is not None:
            user_text = raw

    if user_text is not None:
        try:
            with st.spinner(t("chat.thinking", "Thinking…")):
                reply, meta = controller.chat_once(user_text)
            if st_session.speak_replies and reply.strip():
                st_session.tts_text_queue.append(reply)
        except SessionNotFoundError as e:
            st.toast(f"{e}", icon="⚠️")
        except ValueError as e:
            st.toast(f"{e}", icon="⚠️")
        except Exception as e:
            logger.exception("Chat flow failed")
            st.toast(describe_openai_error(e), icon="⚠️")
        st.rerun()

with summary_tab:
    st.subheader(t("summary.title", "Your session summary"))

    readiness = calculate_readiness(session)
    st.markdown(f"#### {t('decision.readiness.title', 'Decision Readiness')}: {t(readiness.level_key)}")
    st.progress(readiness.score / 100, text=f"{readiness.score}/100")
    st.caption(t(readiness.encouragement_key))
    with st.expander(t("decision.readiness.checklistTitle", "Your Exploration Checklist")):
        for item in readiness.items:
            icon = "✅" if item.is_complete else "⬜"
            st.markdown(f"{icon} **{t(item.label_key)}**  \n{t(item.description_key)}")

    st.markdown(f"#### {t('decision.questions.title', 'Questions for your kidney team')}")
    questions = current_questions()
    for category in QUESTION_CATEGORIES:
        in_category = [q for q in questions if q.category == category]
        if not in_category:
            continue
        st.markdown(f"**{t(f'decision.questions.categories.{category}', category)}**")
        for q in in_category:
            label = q.text or t(q.text_key)
            checked = st.checkbox(label, value=q.is_selected, key=f"q_{q.id}", help=t(q.reason_key) if q.reason_key else None)
            if q.is_custom:
                q.is_selected = checked
            else:
                st_session.question_choices[q.id] = checked
    with st.form("custom_question_form", clear_on_submit=True):
        typed = st.text_input(t("decision.questions.addCustom", "Add your own question"))
        if st.form_submit_button(t("decision.questions.add", "Add")):
            try:
                st_session.custom_questions.append(custom_question(typed, controller.clock()))
                st.rerun()
            except ValueError as e:
                st.toast(f"{e}", icon="⚠️")

    st.markdown(f"#### {t('decision.family.title', 'Talking with the people around you')}")
    role_ids = [r.id for r in FAMILY_ROLES]
    st_session.family_role = st.radio(
        t("decision.family.chooseRole", "Who would you like to talk to?"),
        role_ids,
        index=role_ids.index(st_session.family_role),
        horizontal=True,
        format_func=lambda r: t(f"decision.family.roles.{r}", r),
    )
    st.caption(t(f"decision.family.roles.{st_session.family_role}Desc"))
    grouped = group_prompts_by_category(family_prompts(st_session.family_role))
    for category in PromptCategory:
        if category not in grouped:
            continue
        st.markdown(f"**{t(f'decision.family.categories.{category.value}', category.value)}**")
        st.markdown("\n".join(f"- {t(p.text_key)}" for p in grouped[category]))

    st.markdown(f"#### {t('decision.journal.title', 'Decision Journal')}")
    st.caption(t("decision.journal.subtitle"))
    journal_categories = [c.value for c in JournalCategory]
    with st.form("journal_form", clear_on_submit=True):
        journal_text = st.text_area(
            t("decision.journal.whatOnMind", "What's on your mind?"),
            placeholder=t("decision.journal.placeholder"),
        )
        jcol1, jcol2 = st.columns(2)
        journal_category = jcol1.selectbox(
            t("decision.journal.categoryLabel", "Type of entry"),
            journal_categories,
            format_func=journal_category_label,
        )
        journal_treatment = jcol2.selectbox(
            t("decision.journal.relatedTreatment", "Related to a specific treatment? (optional)"),
            [None, *[info.id.value for info in get_all_treatments()]],
            format_func=lambda s: treatment_title(s) if s else t("decision.journal.allTreatments"),
        )
        journal_added = st.form_submit_button(t("decision.journal.addEntry", "Add Entry"))
    if journal_added:
        try:
            controller.add_journal_entry(journal_text, journal_category, journal_treatment)
            st.toast(t("decision.journal.added", "Added to your journal."))
            st.rerun()
        except ValueError as e:
            st.toast(f"{e}", icon="⚠️")

    jstats = journal_stats(session.journal_entries)
    if jstats.total:
        s1, s2, s3 = st.columns(3)
        s1.metric(t("decision.journal.stats.total", "entries"), jstats.total)
        s2.metric(t("decision.journal.stats.concerns", "active concerns"), jstats.concerns)
        s3.metric(t("decision.journal.stats.resolved", "resolved"), jstats.resolved)
        fcol1, fcol2 = st.columns([3, 1])
        journal_filter = fcol1.radio(
            t("decision.journal.filterLabel", "Show"),
            ["all", *journal_categories],
            horizontal=True,
            format_func=lambda c: t("decision.journal.filter.all", "All") if c == "all" else journal_category_label(c),
            key="journal_filter",
        )
        show_resolved = fcol2.toggle(
            t("decision.journal.showResolved", "Show resolved"), value=True, key="journal_show_resolved"
        )
        shown = filter_entries(
            session.journal_entries,
            None if journal_filter == "all" else journal_filter,
            show_resolved,
        )
        if not shown:
            st.caption(t("decision.journal.noMatching", "No entries match your filter."))
        for entry in shown:
            with st.container(border=True):
                text = f"~~{entry.text}~~" if entry.is_resolved else entry.text
                meta = journal_category_label(entry.category)
                if entry.treatment:
                    meta += f" · {treatment_title(entry.treatment)}"
                st.markdown(f"{text}  \n<small>{meta}</small>", unsafe_allow_html=True)
                b1, b2 = st.columns(2)
                resolve_key = "decision.journal.unresolve" if entry.is_resolved else "decision.journal.resolve"
                if b1.button(t(resolve_key), key=f"resolve_{entry.id}"):
                    controller.toggle_journal_resolved(entry.id)
                    st.rerun()
                if b2.button(t("decision.journal.delete", "Delete"), key=f"delete_{entry.id}"):
                    controller.delete_journal_entry(entry.id)
                    st.rerun()
    else:
        st.caption(t("decision.journal.empty", "Start recording your thoughts and concerns."))

    st.divider()
    chosen = [q for q in current_questions() if q.is_selected]
    summary_md = render_summary_markdown(controller.summary(questions=chosen), controller.translator)
    with st.expander(t("summary.preview", "Preview"), expanded=False):
        st.markdown(summary_md)
    st.download_button(
        t("summary.download", "Download summary"),
        data=summary_md,
        file_name=f"kidney-summary-{session.id[:8]}.md",
        mime="text/markdown",
        type="primary",
    )
    st.caption(t("summary.privacy.text", "This summary is created on this page only."))
