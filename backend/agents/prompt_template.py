"""Prompt templates for the marketing capabilities."""
# Templates are rendered with str.format: literal braces are doubled, and the
# {{customer_name}} style merge tags the model should emit are quadrupled.
import json

from backend.app.models import (
    CampaignMetricsInput,
    CustomerAnalysisInput,
    EmailContentInput,
    EmailSequenceInput,
    GeneralAiQueryInput,
    ProductRecommendationInput,
    SendTimeOptimizationInput,
)


GENERAL_ASSISTANT_PROMPT = """You are a helpful and versatile AI marketing assistant. The user will ask you a question or provide a statement.
Provide a concise, helpful, and relevant response.
Return your response as a JSON object with a single key "responseText".

User Query:
```
{user_query}
```

JSON Response:"""


CUSTOMER_ANALYSIS_PROMPT = """Analyze the following customer data, which might be provided as unstructured text, a JSON string, or a CSV string.
Intelligently interpret the data and provide a detailed JSON output.
Customer Data:
```
{customer_data}
```

Based on this data, generate a JSON object with the following structure:
{{
  "profileSummary": "string (Detailed summary of the customer profile)",
  "segments": ["string (e.g., High-Value, At-Risk, New Customer, etc.)"],
  "personalizationOpportunities": ["string (Specific personalization ideas based on data)"],
  "contentThemes": ["string (Relevant content themes, e.g., 'Organic Skincare Tips', 'New Tech Arrivals')"],
  "productSuggestions": ["string (Specific product names or categories to suggest)"],
  "optimalFrequency": "string (e.g., 'Weekly', 'Bi-weekly', 'Monthly')",
  "optimalTiming": "string (e.g., 'Tuesday mornings', 'Weekend afternoons')"
}}
Ensure the output is ONLY the JSON object, without any surrounding text or markdown."""


EMAIL_CONTENT_PROMPT = """Create a personalized email campaign based on the following details. Provide the output as a JSON object.
Campaign Details:
- Segment: {segment}
- Campaign Goal: {campaign_goal}
- Product Focus: {product_focus}
- Special Offers: {special_offers}
- Brand Voice: {brand_voice}
- Customer Insights: {customer_insights}

Generate a JSON object with the following structure:
{{
  "subjectLines": [
    {{ "text": "string (Subject line 1, personalized, <50 chars, include emoji suggestion like '✨')", "emoji": true/false }},
    {{ "text": "string (Subject line 2, urgent variation)", "emoji": true/false }},
    {{ "text": "string (Subject line 3, benefit-focused variation)", "emoji": true/false }},
    {{ "text": "string (Subject line 4, question-based variation)", "emoji": true/false }},
    {{ "text": "string (Subject line 5, curiosity-driven variation)", "emoji": true/false }}
  ],
  "previewText": "string (Compelling preview text, <100 chars)",
  "emailBodyHtml": "string (Full HTML-friendly, mobile-responsive email content. Include personalized greeting, relevant product recommendations based on Product Focus and Customer Insights, compelling value proposition, social proof/testimonials if applicable, and clear call-to-action sections. Use placeholders like {{{{customer_name}}}} for personalization.)",
  "ctas": {{
    "primary": {{ "text": "string (e.g., Shop Now, Learn More)", "link": "#product-link" }},
    "secondary": {{ "text": "string (e.g., Explore Collection, Read Blog Post)", "link": "#secondary-link" }},
    "urgencyDriven": [{{ "text": "string (e.g., Limited Time Offer!, Get 20% Off - Ends Soon!)", "link": "#promo-link" }}]
  }},
  "personalizationNotes": ["string (Key customization elements used or suggested, e.g., 'Dynamic product block based on browsing history', 'Location-based offer for {{{{city}}}}')"]
}}
Ensure the output is ONLY the JSON object. The emailBodyHtml should be a single string containing valid HTML."""


SEND_TIME_PROMPT = """Analyze customer engagement patterns and recommend optimal send times. Provide output as a JSON object.
Customer Engagement Data:
- Historical open times: {historical_open_times}
- Time zone: {time_zone}
- Device usage: {device_usage}
{industry_line}- Engagement patterns: {engagement_patterns}
- Campaign Type: {campaign_type}

Generate a JSON object with the following structure:
{{
  "optimalSendDayTime": "string (e.g., 'Tuesday, 10:00 AM Local Time')",
  "reasoning": "string (Detailed explanation for the primary recommendation)",
  "alternativeOptions": ["string (e.g., 'Thursday, 2:00 PM Local Time for mid-week test')"],
  "timeZoneConsiderations": "string (How to handle multiple time zones if applicable)",
  "frequencyRecommendations": "string (e.g., 'Bi-weekly for this segment', 'Weekly for newsletters')",
  "seasonalAdjustments": "string (Suggestions for seasonal changes, if any)",
  "preferenceBasedVariations": "string (How to vary based on explicit user preferences)",
  "testingStrategy": "string (A/B test different send times, gradual optimization approach)",
  "performanceTrackingMetrics": ["string (e.g., 'Open Rate', 'Click-Through Rate by send time')"]
}}
Ensure the output is ONLY the JSON object."""


PERFORMANCE_PROMPT = """Analyze email campaign performance and provide optimization recommendations. Output as a JSON object.
Campaign Metrics:
- Open Rate: {open_rate}
- Click-Through Rate: {click_through_rate}
- Conversion Rate: {conversion_rate}
- Unsubscribe Rate: {unsubscribe_rate}
- Revenue Generated: {revenue_generated}
- Delivery Rate: {delivery_rate}
{optional_lines}
Generate a JSON object with the following structure:
{{
  "performanceSummary": "string (Overall campaign performance summary)",
  "keyWins": ["string (Positive aspects and successes)"],
  "areasForImprovement": ["string (Areas needing attention)"],
  "benchmarkComparisons": "string (Comparison to industry benchmarks, if possible to infer)",
  "roiAnalysis": "string (Return on Investment analysis based on data)",
  "optimizationRecommendations": {{
    "subjectLine": ["string (Suggestions for subject line improvements)"],
    "content": ["string (Content adjustment ideas)"],
    "timing": ["string (Send time optimization tips based on results)"],
    "segmentation": ["string (Segmentation refinement strategies)"]
  }},
  "nextCampaignStrategy": {{
    "winningElements": ["string (Elements from this campaign to replicate)"],
    "newTestingOpportunities": ["string (New A/B tests to try)"],
    "audienceExpansion": ["string (Ideas for audience growth)"]
  }},
  "automatedFollowUpSequences": {{
    "converters": "string (Strategy for those who converted)",
    "nonOpeners": "string (Strategy for re-engaging non-openers)",
    "engagedNonConverters": "string (Strategy for those who clicked but didn't convert)"
  }}
}}
Ensure the output is ONLY the JSON object."""


PRODUCT_RECOMMENDATION_PROMPT = """Based on customer data and business goals, generate personalized product recommendations. Output as JSON.
Customer Profile: {customer_profile}
Available Products: {available_products}
{inventory_line}Business Goals: {business_goals}

Generate a JSON object with the following structure:
{{
  "primaryRecommendations": [
    {{ "name": "string (Product Name)", "reasoning": "string (Why this product is recommended)", "category": "string (Optional)", "price": "string (Optional, e.g. '$XX.XX')" }}
  ],
  "crossSellOpportunities": [
    {{ "name": "string (Product/Bundle Name)", "reasoning": "string (Why this cross-sell makes sense)", "category": "string (Optional)", "price": "string (Optional)" }}
  ],
  "seasonalTrendingItems": [
    {{ "name": "string (Product Name)", "reasoning": "string (Why it's timely/trending)", "category": "string (Optional)", "price": "string (Optional)" }}
  ]
}}
Ensure the output is ONLY the JSON object. Include 3-5 primary recommendations."""


EMAIL_SEQUENCE_PROMPT = """Create an automated email sequence. Output as a JSON object.
Sequence Type: {sequence_type}
Customer Trigger: {customer_trigger}
Business Goal: {business_goal}
Sequence Length: {sequence_length}

For each email in the sequence, define timing, subject line, content focus, CTA, personalization, and exit conditions.
Generate a JSON object with the following structure:
{{
  "sequenceName": "string (e.g., 'Welcome Series for New Subscribers')",
  "emails": [
    {{
      "timing": "string (e.g., 'Immediately after trigger', '1 hour after trigger', 'Day 2')",
      "subjectLine": "string (Personalized and sequence-appropriate subject)",
      "contentFocus": "string (Key message and value proposition for this email)",
      "cta": "string (Primary call-to-action for this email, e.g., 'Complete Your Profile', 'Shop Bestsellers')",
      "personalization": ["string (e.g., '{{{{customer_name}}}}', '{{{{last_viewed_product}}}}')"],
      "exitConditions": "string (Optional: When to remove customer from this sequence, e.g., 'If purchase made')"
    }}
  ]
}}
Ensure the output is ONLY the JSON object. Create an appropriate number of emails for the specified sequence length.
Example for Abandoned Cart (if type is Abandoned Cart):
Email 1 (1 hour): "Forgot something, {{{{customer_name}}}}?" - Gentle reminder of cart items. CTA: "Return to Cart".
Email 2 (24 hours): "Still thinking it over? Others love these!" - Social proof + items, urgency. CTA: "View Your Cart".
Email 3 (72 hours): "Last chance for your items + a little something extra!" - Discount offer + scarcity. CTA: "Claim Discount & Shop"."""


TRANSCRIPTION_PROMPT = """Transcribe the speech in the attached audio clip verbatim.
Language hint: {language}
Return ONLY the spoken words as plain text. No JSON, no markdown, no speaker labels, no commentary.
If the clip contains no intelligible speech, return an empty response."""


def _has_text(value) -> bool:
    return bool(value and value.strip())


def build_general_prompt(data: GeneralAiQueryInput) -> str:
    return GENERAL_ASSISTANT_PROMPT.format(user_query=data.user_query)


def build_customer_analysis_prompt(data: CustomerAnalysisInput) -> str:
    return CUSTOMER_ANALYSIS_PROMPT.format(customer_data=data.customer_data)


def build_email_content_prompt(data: EmailContentInput) -> str:
    return EMAIL_CONTENT_PROMPT.format(**data.model_dump())


def build_send_time_prompt(data: SendTimeOptimizationInput) -> str:
    fields = data.model_dump(exclude={"industry"})
    industry_line = f"- Industry: {data.industry}\n" if _has_text(data.industry) else ""
    return SEND_TIME_PROMPT.format(industry_line=industry_line, **fields)


def build_performance_prompt(data: CampaignMetricsInput) -> str:
    """Core metrics always; segment and A/B lines only when supplied."""
    optional_lines = ""
    if _has_text(data.segment_performance):
        optional_lines += f"- Segment Performance: {data.segment_performance}\n"
    if data.ab_test_results is not None and not data.ab_test_results.is_empty():
        ab_results = data.ab_test_results.model_dump(by_alias=True, exclude_none=True)
        optional_lines += f"- A/B Test Results: {json.dumps(ab_results)}\n"
    fields = data.model_dump(exclude={"segment_performance", "ab_test_results"})
    return PERFORMANCE_PROMPT.format(optional_lines=optional_lines, **fields)


def build_product_recommendation_prompt(data: ProductRecommendationInput) -> str:
    fields = data.model_dump(exclude={"current_inventory"})
    inventory_line = (
        f"Current Inventory: {data.current_inventory}\n" if _has_text(data.current_inventory) else ""
    )
    return PRODUCT_RECOMMENDATION_PROMPT.format(inventory_line=inventory_line, **fields)


def build_email_sequence_prompt(data: EmailSequenceInput) -> str:
    return EMAIL_SEQUENCE_PROMPT.format(**data.model_dump())


def build_transcription_prompt(language: str) -> str:
    return TRANSCRIPTION_PROMPT.format(language=language)
