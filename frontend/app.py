"""Streamlit frontend for Campaign Copilot."""
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

import streamlit as st

from backend.app.config import BrandingConfig
from backend.app.models import (
    SEQUENCE_TYPES,
    AbTestResults,
    CampaignMetricsInput,
    CustomerAnalysisInput,
    EmailContentInput,
    EmailSequenceInput,
    GeneralAiQueryInput,
    ProductRecommendationInput,
    SendTimeOptimizationInput,
)
from frontend.client import BackendClient, ClientError
from frontend.voice import field_key, microphone_input

PAGES = [
    "Welcome",
    "AI Assistant",
    "Customer Analysis",
    "Email Generation",
    "Send Time Optimization",
    "Performance Analysis",
    "Product Recommendation",
    "Email Sequence Builder",
]

FEATURES = {
    "AI Assistant": "Ask any email marketing question and get a concise answer.",
    "Customer Analysis": "Profile and segment customers from raw text, JSON or CSV data.",
    "Email Generation": "Subject lines, preview text, HTML body and CTAs for a campaign.",
    "Send Time Optimization": "Find the best day and time to reach your audience.",
    "Performance Analysis": "Turn campaign metrics into wins, gaps and next steps.",
    "Product Recommendation": "Match your catalog to a customer profile and business goals.",
    "Email Sequence Builder": "Design automated welcome, cart, post-purchase and win-back flows.",
}

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields."


@dataclass
class FormField:
    name: str
    label: str
    placeholder: str = ""
    required: bool = True
    textarea: bool = False
    height: int = 100


def _css(branding: BrandingConfig) -> str:
    colors = branding.brand.colors
    return f"""
    <style>
    .main-header {{
        font-size: 2.5rem;
        font-weight: bold;
        color: {colors.primary};
        text-align: center;
        margin-bottom: 0.25rem;
    }}
    .slogan {{
        text-align: center;
        font-style: italic;
        color: #7f8c8d;
        margin-bottom: 2rem;
    }}
    .section-header {{
        font-size: 1.5rem;
        font-weight: bold;
        color: {colors.primary};
        margin-top: 1rem;
        margin-bottom: 1rem;
        padding-bottom: 0.5rem;
        border-bottom: 2px solid {colors.primary};
    }}
    </style>
    """


def go_to(page: str) -> None:
    st.session_state.page = page


# ============================================================================
# FORM HELPERS
# ============================================================================

def render_fields(client, form_key: str, fields: List[FormField]) -> Dict[str, str]:
    """Render text fields, each with a voice recorder, and return their values."""
    values = {}
    for field in fields:
        key = field_key(form_key, field.name)
        label = f"{field.label} *" if field.required else f"{field.label} (Optional)"
        if field.textarea:
            values[field.name] = st.text_area(label, key=key, placeholder=field.placeholder, height=field.height)
        else:
            values[field.name] = st.text_input(label, key=key, placeholder=field.placeholder)
        microphone_input(client, form_key, field.name, field.label)
    return values


def missing_required(values: Dict[str, str], fields: List[FormField]) -> bool:
    return any(field.required and not (values.get(field.name) or "").strip() for field in fields)


def run_submission(form_key: str, call: Callable[[], object]) -> None:
    """Replace the form's previous result and error with the outcome of ``call``."""
    st.session_state[f"{form_key}::result"] = None
    st.session_state[f"{form_key}::error"] = None
    try:
        st.session_state[f"{form_key}::result"] = call()
    except ClientError as e:
        st.session_state[f"{form_key}::error"] = e.message


def submit(
    form_key: str,
    label: str,
    disabled: bool,
    call: Callable[[], object],
    spinner: str
) -> None:
    """One request in flight per form; result or error stored in session state."""
    clicked = st.button(label, type="primary", disabled=disabled, key=f"{form_key}::submit")
    if disabled:
        st.caption(REQUIRED_FIELDS_MESSAGE)
    if clicked:
        with st.spinner(spinner):
            run_submission(form_key, call)

    error = st.session_state.get(f"{form_key}::error")
    if error:
        st.error(error)


def result_of(form_key: str):
    return st.session_state.get(f"{form_key}::result")


def bullet_list(title: str, items: List[str]) -> None:
    if not items:
        return
    st.markdown(f"**{title}:**")
    st.markdown("\n".join(f"- {item}" for item in items))


def _optional(value: str) -> Optional[str]:
    return value if value and value.strip() else None


# ============================================================================
# PAGES
# ============================================================================

def welcome_page() -> None:
    st.markdown('<div class="section-header">👋 Welcome</div>', unsafe_allow_html=True)
    st.write("Pick a tool to get started. Every form accepts typed or dictated input.")
    columns = st.columns(2)
    for index, (page, description) in enumerate(FEATURES.items()):
        with columns[index % 2]:
            with st.container(border=True):
                st.markdown(f"### {page}")
                st.write(description)
                st.button(f"Open {page}", key=f"welcome::{page}", on_click=go_to, args=(page,))


def assistant_page(client) -> None:
    form_key = "assistant"
    fields = [FormField("user_query", "Your Question", "e.g., How can I improve my open rates?", textarea=True, height=150)]
    values = render_fields(client, form_key, fields)
    submit(
        form_key, "💬 Ask AI", missing_required(values, fields),
        lambda: client.ask_assistant(GeneralAiQueryInput(**values)),
        "Thinking...",
    )
    result = result_of(form_key)
    if result:
        st.markdown("### AI Response")
        st.markdown(result.response_text)


def _load_customer_file(uploader_key: str, target_key: str) -> None:
    uploaded = st.session_state.get(uploader_key)
    if uploaded is None:
        return
    try:
        st.session_state[target_key] = uploaded.getvalue().decode("utf-8")
        st.session_state["customers::error"] = None
    except UnicodeDecodeError:
        st.session_state["customers::error"] = "Error reading file."


def customer_analysis_page(client) -> None:
    form_key = "customers"
    st.file_uploader(
        "Upload customer data (.txt, .csv, .json)",
        type=["txt", "csv", "json"],
        key="customers::upload",
        on_change=_load_customer_file,
        args=("customers::upload", field_key(form_key, "customer_data")),
    )
    fields = [FormField(
        "customer_data", "Customer Data",
        "Paste purchase history, demographics, browsing behavior... as text, JSON or CSV",
        textarea=True, height=220,
    )]
    values = render_fields(client, form_key, fields)
    submit(
        form_key, "🔍 Analyze Data", missing_required(values, fields),
        lambda: client.analyze_customer_data(CustomerAnalysisInput(**values)),
        "Analyzing customer data...",
    )
    result = result_of(form_key)
    if result:
        st.markdown("### Analysis Results")
        st.markdown(f"**Profile Summary:** {result.profile_summary}")
        st.markdown(f"**Segments:** {', '.join(result.segments)}")
        bullet_list("Personalization Opportunities", result.personalization_opportunities)
        bullet_list("Content Themes", result.content_themes)
        bullet_list("Product Suggestions", result.product_suggestions)
        st.markdown(f"**Optimal Frequency:** {result.optimal_frequency}")
        st.markdown(f"**Optimal Timing:** {result.optimal_timing}")


def email_generation_page(client) -> None:
    form_key = "emails"
    fields = [
        FormField("segment", "Customer Segment", "e.g., High-Value, New Subscribers"),
        FormField("campaign_goal", "Campaign Goal", "e.g., Awareness, Conversion, Retention"),
        FormField("product_focus", "Product Focus", "e.g., New Summer Collection, Specific Product SKU"),
        FormField("special_offers", "Special Offers", "e.g., 20% off, Free Shipping"),
        FormField("brand_voice", "Brand Voice", "e.g., Professional, Casual, Friendly"),
        FormField("customer_insights", "Customer Insights (from Analysis)",
                  "e.g., Prefers organic, shops on weekends", textarea=True),
    ]
    values = render_fields(client, form_key, fields)
    submit(
        form_key, "✉️ Generate Email", missing_required(values, fields),
        lambda: client.generate_email_content(EmailContentInput(**values)),
        "Generating email content...",
    )
    result = result_of(form_key)
    if result:
        st.markdown("### Generated Email Content")
        bullet_list("Subject Lines", [line.text for line in result.subject_lines])
        st.markdown(f"**Preview Text:** {result.preview_text}")
        st.markdown("**Email Body:**")
        st.html(result.email_body_html)
        with st.expander("HTML source"):
            st.code(result.email_body_html, language="html")
        ctas = result.ctas
        cta_lines = [f"Primary: {ctas.primary.text} ({ctas.primary.link})"]
        if ctas.secondary:
            cta_lines.append(f"Secondary: {ctas.secondary.text} ({ctas.secondary.link})")
        cta_lines.extend(f"Urgency: {cta.text} ({cta.link})" for cta in ctas.urgency_driven)
        bullet_list("Calls to Action", cta_lines)
        bullet_list("Personalization Notes", result.personalization_notes)
        st.download_button(
            label="📥 Download HTML",
            data=result.email_body_html,
            file_name=f"email_{datetime.now().strftime('%Y%m%d_%H%M%S')}.html",
            mime="text/html",
        )


def send_time_page(client) -> None:
    form_key = "send_time"
    fields = [
        FormField("historical_open_times", "Historical Open Times",
                  "e.g., Mostly Weekdays 9-11 AM, Some Saturday afternoons; or list of timestamps", textarea=True),
        FormField("time_zone", "Primary Time Zone", "e.g., EST, PST, Customer Local Time"),
        FormField("device_usage", "Device Usage", "e.g., Primarily Mobile, Mix of Desktop/Mobile"),
        FormField("engagement_patterns", "Engagement Patterns", "e.g., High weekday activity, low weekends"),
        FormField("campaign_type", "Campaign Type", "e.g., Newsletter, Promotional, Transactional"),
        FormField("industry", "Industry (for B2B)", "e.g., SaaS, Healthcare, Finance", required=False),
    ]
    values = render_fields(client, form_key, fields)

    def call():
        payload = dict(values, industry=_optional(values["industry"]))
        return client.optimize_send_time(SendTimeOptimizationInput(**payload))

    submit(form_key, "⏰ Optimize Send Time", missing_required(values, fields), call, "Optimizing send time...")
    result = result_of(form_key)
    if result:
        st.markdown("### Send Time Recommendation")
        st.success(f"**Optimal Send Time:** {result.optimal_send_day_time}")
        st.markdown(f"**Reasoning:** {result.reasoning}")
        bullet_list("Alternative Options", result.alternative_options)
        st.markdown(f"**Time Zone Considerations:** {result.time_zone_considerations}")
        st.markdown(f"**Frequency:** {result.frequency_recommendations}")
        if result.seasonal_adjustments:
            st.markdown(f"**Seasonal Adjustments:** {result.seasonal_adjustments}")
        if result.preference_based_variations:
            st.markdown(f"**Preference-Based Variations:** {result.preference_based_variations}")
        st.markdown(f"**Testing Strategy:** {result.testing_strategy}")
        bullet_list("Metrics to Track", result.performance_tracking_metrics)


def performance_page(client) -> None:
    form_key = "performance"
    metric_fields = [
        FormField("open_rate", "Open Rate (%)", "e.g., 25"),
        FormField("click_through_rate", "Click-Through Rate (%)", "e.g., 5"),
        FormField("conversion_rate", "Conversion Rate (%)", "e.g., 2"),
        FormField("unsubscribe_rate", "Unsubscribe Rate (%)", "e.g., 0.5"),
        FormField("revenue_generated", "Revenue Generated ($)", "e.g., 1500"),
        FormField("delivery_rate", "Delivery Rate (%)", "e.g., 99"),
    ]
    optional_fields = [
        FormField("segment_performance", "Segment Performance",
                  "e.g., High-Value: OR 30%, CTR 7% | At-Risk: OR 15%, CTR 3%", required=False, textarea=True),
        FormField("ab_subject_line", "Subject Line A/B Test",
                  "e.g., A (22% OR) vs B (28% OR - Winner)", required=False),
        FormField("ab_send_time", "Send Time A/B Test",
                  "e.g., Tue 10AM (25% OR) vs Thu 2PM (23% OR)", required=False),
        FormField("ab_cta", "CTA A/B Test",
                  'e.g., "Shop Now" (5% CTR) vs "Learn More" (3% CTR)', required=False),
    ]
    values = render_fields(client, form_key, metric_fields)
    with st.expander("Segment and A/B test results (optional)"):
        values.update(render_fields(client, form_key, optional_fields))

    def call():
        ab_results = AbTestResults(
            subject_line=_optional(values["ab_subject_line"]),
            send_time=_optional(values["ab_send_time"]),
            cta=_optional(values["ab_cta"]),
        )
        data = CampaignMetricsInput(
            **{field.name: values[field.name] for field in metric_fields},
            segment_performance=_optional(values["segment_performance"]),
            ab_test_results=None if ab_results.is_empty() else ab_results,
        )
        return client.analyze_performance(data)

    submit(form_key, "📈 Analyze Performance", missing_required(values, metric_fields), call, "Analyzing campaign...")
    result = result_of(form_key)
    if result:
        st.markdown("### Performance Analysis")
        st.markdown(f"**Summary:** {result.performance_summary}")
        bullet_list("Key Wins", result.key_wins)
        bullet_list("Areas for Improvement", result.areas_for_improvement)
        if result.benchmark_comparisons:
            st.markdown(f"**Benchmark Comparisons:** {result.benchmark_comparisons}")
        if result.roi_analysis:
            st.markdown(f"**ROI Analysis:** {result.roi_analysis}")
        recs = result.optimization_recommendations
        with st.expander("Optimization Recommendations", expanded=True):
            bullet_list("Subject Line", recs.subject_line)
            bullet_list("Content", recs.content)
            bullet_list("Timing", recs.timing)
            bullet_list("Segmentation", recs.segmentation)
        strategy = result.next_campaign_strategy
        with st.expander("Next Campaign Strategy"):
            bullet_list("Winning Elements", strategy.winning_elements)
            bullet_list("New Testing Opportunities", strategy.new_testing_opportunities)
            bullet_list("Audience Expansion", strategy.audience_expansion)
        follow_up = result.automated_follow_up_sequences
        if follow_up:
            with st.expander("Automated Follow-Up Sequences"):
                if follow_up.converters:
                    st.markdown(f"**Converters:** {follow_up.converters}")
                if follow_up.non_openers:
                    st.markdown(f"**Non-Openers:** {follow_up.non_openers}")
                if follow_up.engaged_non_converters:
                    st.markdown(f"**Engaged Non-Converters:** {follow_up.engaged_non_converters}")


def _product_cards(title: str, products) -> None:
    if not products:
        return
    st.markdown(f"#### {title}")
    for product in products:
        with st.container(border=True):
            details = " · ".join(part for part in (product.category, product.price) if part)
            st.markdown(f"**{product.name}**" + (f"  \n_{details}_" if details else ""))
            st.write(product.reasoning)


def product_recommendation_page(client) -> None:
    form_key = "products"
    fields = [
        FormField("customer_profile", "Customer Profile",
                  "Summary of customer data, preferences, purchase history", textarea=True),
        FormField("available_products", "Available Products Catalog",
                  'e.g., "Skincare: Cleanser ($20, organic), Moisturizer ($30, for dry skin)"', textarea=True),
        FormField("current_inventory", "Current Inventory",
                  "e.g., Low stock on X, New arrivals: Y, Z", required=False, textarea=True, height=70),
        FormField("business_goals", "Business Goals",
                  "e.g., Clear old inventory, Promote new items, Increase AOV", textarea=True, height=70),
    ]
    values = render_fields(client, form_key, fields)

    def call():
        payload = dict(values, current_inventory=_optional(values["current_inventory"]))
        return client.recommend_products(ProductRecommendationInput(**payload))

    submit(form_key, "🛍️ Get Recommendations", missing_required(values, fields), call, "Finding products...")
    result = result_of(form_key)
    if result:
        _product_cards("Primary Recommendations", result.primary_recommendations)
        _product_cards("Cross-Sell Opportunities", result.cross_sell_opportunities)
        _product_cards("Seasonal & Trending", result.seasonal_trending_items)


def sequence_builder_page(client) -> None:
    form_key = "sequences"
    sequence_type = st.selectbox("Sequence Type *", SEQUENCE_TYPES, key=field_key(form_key, "sequence_type"))
    fields = [
        FormField("customer_trigger", "Customer Trigger",
                  "e.g., Signs up, Adds to cart but leaves, Inactive for 30 days"),
        FormField("business_goal", "Business Goal",
                  "e.g., Onboard new users, Recover lost sales, Win back customers"),
        FormField("sequence_length", "Sequence Length & Timeframe",
                  "e.g., 3 emails over 5 days, 4 emails over 2 weeks"),
    ]
    values = render_fields(client, form_key, fields)
    submit(
        form_key, "🔁 Build Sequence", missing_required(values, fields),
        lambda: client.generate_email_sequence(EmailSequenceInput(sequence_type=sequence_type, **values)),
        "Building email sequence...",
    )
    result = result_of(form_key)
    if result:
        st.markdown(f"### {result.sequence_name}")
        for index, email in enumerate(result.emails, start=1):
            with st.container(border=True):
                st.markdown(f"**Email {index}** · _{email.timing}_")
                st.markdown(f"**Subject:** {email.subject_line}")
                st.markdown(f"**Content Focus:** {email.content_focus}")
                st.markdown(f"**CTA:** {email.cta}")
                if email.personalization:
                    st.markdown(f"**Personalization:** {', '.join(email.personalization)}")
                if email.exit_conditions:
                    st.markdown(f"**Exit Conditions:** {email.exit_conditions}")


PAGE_RENDERERS = {
    "AI Assistant": assistant_page,
    "Customer Analysis": customer_analysis_page,
    "Email Generation": email_generation_page,
    "Send Time Optimization": send_time_page,
    "Performance Analysis": performance_page,
    "Product Recommendation": product_recommendation_page,
    "Email Sequence Builder": sequence_builder_page,
}


# ============================================================================
# LAYOUT
# ============================================================================

def render_footer(branding: BrandingConfig) -> None:
    brand = branding.brand
    st.markdown("---")
    links = " · ".join(f"[{platform}]({url})" for platform, url in brand.social_media.links().items())
    if links:
        st.markdown(f"<div style='text-align: center;'>{links}</div>", unsafe_allow_html=True)
    contact = " | ".join(part for part in (brand.email, brand.mobile) if part)
    footer = f"© {datetime.now().year} {brand.long_name}. All rights reserved."
    if contact:
        footer += f"<br/>Contact: {contact}"
    if brand.website:
        footer += f"<br/>Powered by <a href='{brand.website}'>{brand.short_name}</a>"
    st.markdown(f"<div style='text-align: center; color: #7f8c8d;'>{footer}</div>", unsafe_allow_html=True)


def render_app(client) -> None:
    """Render the whole single-page app against ``client``."""
    branding = client.branding()
    brand = branding.brand

    st.markdown(_css(branding), unsafe_allow_html=True)
    st.markdown(f'<div class="main-header">📧 {brand.short_name}</div>', unsafe_allow_html=True)
    st.markdown(f'<div class="slogan">"{brand.slogan}"</div>', unsafe_allow_html=True)

    if "page" not in st.session_state:
        st.session_state.page = PAGES[0]
    page = st.sidebar.radio(brand.short_name, PAGES, key="page")

    if page == "Welcome":
        welcome_page()
    else:
        st.markdown(f'<div class="section-header">{page}</div>', unsafe_allow_html=True)
        PAGE_RENDERERS[page](client)

    render_footer(branding)


def main() -> None:
    st.set_page_config(page_title="Campaign Copilot", page_icon="📧", layout="wide")
    client = BackendClient()
    if not client.is_healthy():
        st.error("⚠️ Backend API is not running. Please start it with: `campaign-copilot-api`")
        st.stop()
    render_app(client)


if __name__ == "__main__":
    main()
