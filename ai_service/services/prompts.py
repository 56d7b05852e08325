"""
System prompts for the content generation actions
"""

TECH_CATEGORIES = [
    "NLP", "Computer Vision", "Machine Learning", "Predictive Analytics", "IoT", "Edge AI",
    "RPA", "Deep Learning", "Neural Networks", "GenAI", "Blockchain", "Cloud Computing",
    "VR/AR", "Quantum Computing",
]

INDUSTRIES = [
    "Government", "Healthcare", "Education", "Finance", "Smart Cities", "Energy",
    "Transportation", "Security", "Defense", "Retail", "Manufacturing", "Agriculture",
    "Media", "Telecommunications", "Business",
]

DEPLOYMENT_STATUSES = ["Production", "Pilot", "Development", "Planning", "Concept", "Proof of Concept"]


def _quoted(options):
    return "[" + ", ".join(f'"{option}"' for option in options) + "]"


# Onboarding chat steps; each extracts a group of submission fields as JSON
ANALYZE_STEP_PROMPTS = {
    1: """Extract the following information from the user's message about their AI solution:
- solutionName (the name/title of their AI product/service)
- description (comprehensive explanation of what the solution does, how it works, problems it solves, features, benefits, use cases)
- companyName (if mentioned)
- contactEmail (if mentioned)

IMPORTANT: The description should capture ALL details provided by the user about their solution.

Format the response as JSON with these exact keys: solutionName, description, companyName, contactEmail
Only include keys that have actual values from the user's message.""",

    2: f"""Extract the following information from the user's message:
- website (company website URL)
- techCategory - map user's descriptions to these exact options: {_quoted(TECH_CATEGORIES)}
- industryFocus - map user's descriptions to these exact options: {_quoted(INDUSTRIES)}

IMPORTANT:
- For techCategory: Match user's technical descriptions to the exact strings from the list above
- For industryFocus: Match user's industry mentions to the exact strings from the list above
- If user mentions "government", "public sector", "gov" -> use "Government"
- If user mentions "AI", "artificial intelligence", "machine learning", "ML" -> use "Machine Learning"
- If user mentions "vision", "image", "video", "visual" -> use "Computer Vision"
- If user mentions "language", "text", "speech", "NLP" -> use "NLP"
- If user mentions "website", "site", "web" -> extract the URL for website field

Format as JSON with keys: website, techCategory (array), industryFocus (array)
Only include keys that have actual values from the user's message.""",

    3: f"""Extract deployment and language support information:
- deploymentStatus - map to one of these exact options: {_quoted(DEPLOYMENT_STATUSES)}
- clients (if they mention current clients or deployments)
- arabicSupport (boolean - true if they mention Arabic support, false if they say no, undefined if not mentioned)
- arabicDetails (if they provide specifics about Arabic capabilities)

IMPORTANT: For deploymentStatus, map user descriptions:
- "live", "deployed", "in production", "customers using" -> "Production"
- "pilot", "testing", "trial" -> "Pilot"
- "developing", "building", "coding" -> "Development"
- "planning", "designing" -> "Planning"
- "idea", "concept" -> "Concept"
- "proof of concept", "POC", "prototype" -> "Proof of Concept"

Format as JSON with keys: deploymentStatus, clients, arabicSupport, arabicDetails
Only include keys that have actual values from the user's message.""",

    4: """Extract Saudi market specific information:
- ksaCustomization (boolean - true if they mention Saudi/KSA specific features, false if they say no)
- ksaCustomizationDetails (specific details about Saudi market adaptations)

Format as JSON with keys: ksaCustomization, ksaCustomizationDetails
Only include keys that have actual values from the user's message.""",
}

SUMMARY_PROMPT = """Generate a concise, professional summary (100-150 words) for an AI solution based on the provided description.
The summary should be suitable for search results and solution previews.
Focus on key benefits, main features, and value proposition.
Make it engaging and clear for potential clients."""

TAGS_PROMPT = """Generate 5-8 relevant tags for an AI solution based on the provided description and categories.
Tags should be:
- Short and descriptive (1-3 words each)
- Relevant to the solution's functionality and target market
- Mix of technical and business-focused terms
- Suitable for search and categorization

Return the tags as a JSON array of strings."""

RECOMMENDATION_PROMPT = """You are an AI solution recommendation expert. Analyze the provided solution details and user needs to generate a detailed compatibility assessment. Include:
1. Overall fit score (0-100%)
2. Key strengths that match the needs
3. Potential gaps or limitations
4. Implementation considerations
Return the analysis as a JSON object with these exact keys: score, strengths, gaps, considerations, summary"""
