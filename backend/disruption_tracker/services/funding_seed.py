"""
Curated AI funding rounds used to populate an empty funding table.
"""

from typing import List

from loguru import logger

from disruption_tracker.schemas.funding import FundingRoundSchema

SEED_ROUNDS: List[dict] = [
    {'id': 'openai-110b-2026', 'company_name': 'OpenAI', 'funding_amount_m': 110_000, 'funding_display': '$110B', 'round_type': 'Strategic', 'investors': ['Amazon', 'Nvidia', 'SoftBank', 'Microsoft'], 'industry': 'AI Platform', 'location': 'San Francisco, US', 'announced_date': '2026-02-01', 'description': 'OpenAI raises $110B at $730B pre-money valuation, largest private tech fundraise ever', 'valuation_display': '$730B'},
    {'id': 'anthropic-30b-2026', 'company_name': 'Anthropic', 'funding_amount_m': 30_000, 'funding_display': '$30B', 'round_type': 'Series G', 'investors': ['Founders Fund', 'Coatue', 'Nvidia', 'Google'], 'industry': 'AI Safety', 'location': 'San Francisco, US', 'announced_date': '2026-02-01', 'description': 'Anthropic raises $30B Series G at $380B valuation, led by Founders Fund and Coatue', 'valuation_display': '$380B'},
    {'id': 'waymo-16b-2026', 'company_name': 'Waymo', 'funding_amount_m': 16_000, 'funding_display': '$16B', 'round_type': 'Strategic', 'investors': ['Alphabet', 'Strategic Investors'], 'industry': 'Autonomous Vehicles', 'location': 'Mountain View, US', 'announced_date': '2026-02-01', 'description': 'Waymo secures $16B strategic investment round for autonomous driving expansion', 'valuation_display': 'Alphabet subsidiary'},
    {'id': 'xai-20b-2026', 'company_name': 'xAI', 'funding_amount_m': 20_000, 'funding_display': '$20B', 'round_type': 'Strategic', 'investors': ['Nvidia', 'Cisco', 'Fidelity', 'Sequoia Capital', 'a16z'], 'industry': 'AI Platform', 'location': 'San Francisco, US', 'announced_date': '2026-01-15', 'description': 'Elon Musk\'s xAI raises $20B at $200B+ valuation from top Silicon Valley firms', 'valuation_display': '$200B+'},
    {'id': 'skild-1b4-2026', 'company_name': 'Skild AI', 'funding_amount_m': 1_400, 'funding_display': '$1.4B', 'round_type': 'Series C', 'investors': ['SoftBank', 'Nvidia', 'Bezos Expeditions'], 'industry': 'AI Robotics', 'location': 'Pittsburgh, US', 'announced_date': '2026-01-10', 'description': 'Skild AI closes $1.4B Series C at $14B valuation for general-purpose robotics AI models', 'valuation_display': '$14B'},
    {'id': 'physical-intelligence-400m-2026', 'company_name': 'Physical Intelligence', 'funding_amount_m': 400, 'funding_display': '$400M', 'round_type': 'Series B', 'investors': ['Sequoia', 'Lux Capital', 'Thrive Capital'], 'industry': 'AI Robotics', 'location': 'San Francisco, US', 'announced_date': '2026-01-05', 'description': 'Physical Intelligence (π) raises $400M Series B to scale robotic foundation models', 'valuation_display': '$3B'},
    {'id': 'openai-40b-2025', 'company_name': 'OpenAI', 'funding_amount_m': 40_000, 'funding_display': '$40B', 'round_type': 'Strategic', 'investors': ['SoftBank', 'Microsoft', 'Thrive Capital'], 'industry': 'AI Platform', 'location': 'San Francisco, US', 'announced_date': '2025-03-15', 'description': 'OpenAI raises $40B led by SoftBank at $340B valuation', 'valuation_display': '$340B'},
    {'id': 'anysphere-900m-2025', 'company_name': 'Anysphere (Cursor)', 'funding_amount_m': 900, 'funding_display': '$900M', 'round_type': 'Series C', 'investors': ['a16z', 'Thrive Capital', 'Kleiner Perkins'], 'industry': 'AI Dev Tools', 'location': 'San Francisco, US', 'announced_date': '2025-08-20', 'description': 'Cursor maker Anysphere raises $900M Series C at $9B valuation', 'valuation_display': '$9B'},
    {'id': 'perplexity-500m-2025', 'company_name': 'Perplexity AI', 'funding_amount_m': 500, 'funding_display': '$500M', 'round_type': 'Series D', 'investors': ['SoftBank', 'Nvidia', 'IVP', 'NEA'], 'industry': 'AI Search', 'location': 'San Francisco, US', 'announced_date': '2025-06-10', 'description': 'Perplexity AI raises $500M Series D as AI search challenger to Google', 'valuation_display': '$14B'},
    {'id': 'cognition-2b-2025', 'company_name': 'Cognition (Devin)', 'funding_amount_m': 2_000, 'funding_display': '$2B', 'round_type': 'Series B', 'investors': ['Founders Fund', 'a16z', 'Khosla Ventures'], 'industry': 'AI Coding', 'location': 'San Francisco, US', 'announced_date': '2025-04-01', 'description': 'Cognition raises $2B for Devin, the autonomous AI software engineer', 'valuation_display': '$4B'},
    {'id': 'manus-ai-75m-2025', 'company_name': 'Manus AI', 'funding_amount_m': 75, 'funding_display': '$75M', 'round_type': 'Series A', 'investors': ['Peak XV Partners', 'SoftBank China', 'Qiming Ventures'], 'industry': 'AI Agents', 'location': 'Beijing, China', 'announced_date': '2025-03-05', 'description': 'Manus AI raises $75M to scale general-purpose AI agent platform', 'valuation_display': '$500M'},
    {'id': 'runway-308m-2025', 'company_name': 'Runway ML', 'funding_amount_m': 308, 'funding_display': '$308M', 'round_type': 'Series D', 'investors': ['General Atlantic', 'Google', 'Nvidia'], 'industry': 'AI Video', 'location': 'New York, US', 'announced_date': '2025-02-14', 'description': 'Runway raises $308M Series D at $4B valuation for generative video AI', 'valuation_display': '$4B'},
    {'id': 'perplexity-250m-2025', 'company_name': 'Perplexity AI', 'funding_amount_m': 250, 'funding_display': '$250M', 'round_type': 'Series C', 'investors': ['SoftBank', 'Nvidia', 'NEA', 'Bezos'], 'industry': 'AI Search', 'location': 'San Francisco, US', 'announced_date': '2025-01-20', 'description': 'Perplexity raises $250M Series C at $9B valuation', 'valuation_display': '$9B'},
    {'id': 'xai-6b-dec-2024', 'company_name': 'xAI', 'funding_amount_m': 6_000, 'funding_display': '$6B', 'round_type': 'Series B', 'investors': ['a16z', 'Sequoia', 'Kingdom Holdings', 'Lightspeed'], 'industry': 'AI Platform', 'location': 'San Francisco, US', 'announced_date': '2024-12-05', 'description': 'xAI raises $6B Series B valuing Grok maker at $50B', 'valuation_display': '$50B'},
    {'id': 'scale-ai-1b-2024', 'company_name': 'Scale AI', 'funding_amount_m': 1_000, 'funding_display': '$1B', 'round_type': 'Series F', 'investors': ['Amazon', 'Cisco', 'Meta', 'Accel'], 'industry': 'AI Data', 'location': 'San Francisco, US', 'announced_date': '2024-05-22', 'description': 'Scale AI raises $1B Series F at $13.8B valuation, key AI training data provider', 'valuation_display': '$13.8B'},
    {'id': 'cohere-500m-2024', 'company_name': 'Cohere', 'funding_amount_m': 500, 'funding_display': '$500M', 'round_type': 'Series D', 'investors': ['Nvidia', 'Oracle', 'Salesforce Ventures', 'Tiger Global'], 'industry': 'AI Enterprise', 'location': 'Toronto, Canada', 'announced_date': '2024-07-22', 'description': 'Cohere raises $500M Series D at $5B valuation for enterprise AI', 'valuation_display': '$5B'},
    {'id': 'groq-640m-2024', 'company_name': 'Groq', 'funding_amount_m': 640, 'funding_display': '$640M', 'round_type': 'Series D', 'investors': ['BlackRock', 'Cisco', 'Samsung', 'Tiger Global'], 'industry': 'AI Infrastructure', 'location': 'San Jose, US', 'announced_date': '2024-08-05', 'description': 'Groq raises $640M for ultra-fast AI inference chips powering LPU technology', 'valuation_display': '$2.8B'},
    {'id': 'mistral-640m-2024', 'company_name': 'Mistral AI', 'funding_amount_m': 640, 'funding_display': '€600M', 'round_type': 'Series B', 'investors': ['General Catalyst', 'a16z', 'BNP Paribas', 'Nvidia'], 'industry': 'AI Foundation Models', 'location': 'Paris, France', 'announced_date': '2024-06-11', 'description': 'Mistral AI raises €600M ($640M) Series B at $6B valuation', 'valuation_display': '$6B'},
    {'id': 'harvey-300m-2024', 'company_name': 'Harvey AI', 'funding_amount_m': 300, 'funding_display': '$300M', 'round_type': 'Series D', 'investors': ['GV', 'Kleiner Perkins', 'OpenAI Startup Fund', 'Sequoia'], 'industry': 'AI Legal', 'location': 'San Francisco, US', 'announced_date': '2024-09-10', 'description': 'Harvey raises $300M Series D at $1.5B valuation for AI legal platform', 'valuation_display': '$1.5B'},
    {'id': 'poolside-500m-2024', 'company_name': 'Poolside', 'funding_amount_m': 500, 'funding_display': '$500M', 'round_type': 'Series B', 'investors': ['Bain Capital Ventures', 'DST Global', 'Nvidia'], 'industry': 'AI Coding', 'location': 'San Francisco, US', 'announced_date': '2024-08-15', 'description': 'Poolside raises $500M for AI coding assistant at $3B valuation', 'valuation_display': '$3B'},
    {'id': 'pi-400m-2024', 'company_name': 'Physical Intelligence', 'funding_amount_m': 400, 'funding_display': '$400M', 'round_type': 'Series A', 'investors': ['Jeff Bezos', 'a16z', 'OpenAI', 'Lux Capital'], 'industry': 'AI Robotics', 'location': 'San Francisco, US', 'announced_date': '2024-11-04', 'description': 'Physical Intelligence raises $400M Series A to build general-purpose robot foundation models', 'valuation_display': '$2.4B'},
    {'id': 'sierra-175m-2024', 'company_name': 'Sierra AI', 'funding_amount_m': 175, 'funding_display': '$175M', 'round_type': 'Series B', 'investors': ['Sequoia', 'a16z', 'Benchmark'], 'industry': 'AI Customer Service', 'location': 'San Francisco, US', 'announced_date': '2024-07-18', 'description': 'Sierra raises $175M at $4.5B valuation for conversational AI platform', 'valuation_display': '$4.5B'},
    {'id': 'writer-200m-2024', 'company_name': 'Writer', 'funding_amount_m': 200, 'funding_display': '$200M', 'round_type': 'Series C', 'investors': ['Iconiq Growth', 'Salesforce Ventures', 'Citi Ventures'], 'industry': 'AI Enterprise', 'location': 'San Francisco, US', 'announced_date': '2024-09-17', 'description': 'Writer raises $200M Series C at $1.9B valuation for enterprise AI platform', 'valuation_display': '$1.9B'},
    {'id': 'glean-260m-2024', 'company_name': 'Glean', 'funding_amount_m': 260, 'funding_display': '$260M', 'round_type': 'Series E', 'investors': ['Kleiner Perkins', 'Lightspeed', 'Sequoia', 'General Catalyst'], 'industry': 'AI Enterprise Search', 'location': 'Palo Alto, US', 'announced_date': '2024-02-27', 'description': 'Glean raises $260M Series E at $2.2B valuation for AI-powered enterprise search', 'valuation_display': '$2.2B'},
    {'id': 'together-106m-2024', 'company_name': 'Together AI', 'funding_amount_m': 106, 'funding_display': '$106M', 'round_type': 'Series A', 'investors': ['Salesforce Ventures', 'Nvidia', 'a16z', 'Kleiner Perkins'], 'industry': 'AI Infrastructure', 'location': 'San Francisco, US', 'announced_date': '2024-03-13', 'description': 'Together AI raises $106M to build open-source AI cloud infrastructure', 'valuation_display': '$1.25B'},
    {'id': 'elevenlabs-80m-2024', 'company_name': 'ElevenLabs', 'funding_amount_m': 80, 'funding_display': '$80M', 'round_type': 'Series B', 'investors': ['a16z', 'Sequoia', 'Smash Capital'], 'industry': 'AI Audio', 'location': 'New York, US', 'announced_date': '2024-01-22', 'description': 'ElevenLabs raises $80M Series B at $1.1B valuation for AI voice synthesis', 'valuation_display': '$1.1B'},
    {'id': 'synthesia-90m-2024', 'company_name': 'Synthesia', 'funding_amount_m': 90, 'funding_display': '$90M', 'round_type': 'Series C', 'investors': ['a16z', 'Nvidia', 'GV', 'Kleiner Perkins'], 'industry': 'AI Video', 'location': 'London, UK', 'announced_date': '2024-05-08', 'description': 'Synthesia raises $90M Series C at $1B valuation for AI avatar video platform', 'valuation_display': '$1B'},
    {'id': 'replit-97m-2024', 'company_name': 'Replit', 'funding_amount_m': 97, 'funding_display': '$97M', 'round_type': 'Series B', 'investors': ['a16z', 'Google Ventures', 'Khosla Ventures'], 'industry': 'AI Dev Tools', 'location': 'San Francisco, US', 'announced_date': '2024-04-05', 'description': 'Replit raises $97M Series B at $1.16B for AI-powered coding platform', 'valuation_display': '$1.16B'},
    {'id': 'minimax-600m-2024', 'company_name': 'MiniMax', 'funding_amount_m': 600, 'funding_display': '$600M', 'round_type': 'Series B', 'investors': ['HongShan', 'Tencent', 'Alibaba', 'IDG Capital'], 'industry': 'AI Foundation Models', 'location': 'Shanghai, China', 'announced_date': '2024-08-12', 'description': 'MiniMax raises $600M for multimodal AI platform at $2.5B valuation', 'valuation_display': '$2.5B'},
    {'id': 'moonshot-1b-2024', 'company_name': 'Moonshot AI', 'funding_amount_m': 1_000, 'funding_display': '$1B', 'round_type': 'Series C', 'investors': ['Alibaba', 'HongShan', 'Tencent', 'Xiaomi'], 'industry': 'AI Foundation Models', 'location': 'Beijing, China', 'announced_date': '2024-02-19', 'description': 'Kimi maker Moonshot AI raises $1B at $2.5B valuation in competitive China AI race', 'valuation_display': '$2.5B'},
    {'id': 'pika-80m-2023', 'company_name': 'Pika Labs', 'funding_amount_m': 80, 'funding_display': '$80M', 'round_type': 'Series A', 'investors': ['Lightspeed', 'Greenoaks', 'Elad Gil'], 'industry': 'AI Video', 'location': 'Palo Alto, US', 'announced_date': '2023-11-27', 'description': 'Pika Labs raises $80M Series A for AI video generation at $470M valuation', 'valuation_display': '$470M'},
    {'id': 'huggingface-235m-2023', 'company_name': 'Hugging Face', 'funding_amount_m': 235, 'funding_display': '$235M', 'round_type': 'Series D', 'investors': ['Google', 'Nvidia', 'Amazon', 'Salesforce', 'IBM'], 'industry': 'AI Open Source', 'location': 'New York, US', 'announced_date': '2023-08-24', 'description': 'Hugging Face raises $235M Series D at $4.5B valuation, the GitHub of AI', 'valuation_display': '$4.5B'},
    {'id': 'inflection-1b3-2023', 'company_name': 'Inflection AI', 'funding_amount_m': 1_300, 'funding_display': '$1.3B', 'round_type': 'Strategic', 'investors': ['Microsoft', 'Reid Hoffman', 'Bill Gates', 'Nvidia', 'Eric Schmidt'], 'industry': 'AI Platform', 'location': 'Palo Alto, US', 'announced_date': '2023-06-29', 'description': 'Inflection AI raises $1.3B from Microsoft and tech titans for Pi AI assistant', 'valuation_display': '$4B'},
    {'id': 'character-ai-150m-2023', 'company_name': 'Character AI', 'funding_amount_m': 150, 'funding_display': '$150M', 'round_type': 'Series A', 'investors': ['a16z', 'Spark Capital'], 'industry': 'AI Consumer', 'location': 'Menlo Park, US', 'announced_date': '2023-03-23', 'description': 'Character.AI raises $150M Series A at $1B valuation for AI character platform', 'valuation_display': '$1B'},
    {'id': 'imbue-200m-2023', 'company_name': 'Imbue', 'funding_amount_m': 200, 'funding_display': '$200M', 'round_type': 'Series B', 'investors': ['Astera Institute', 'Samsung Next', 'NVentures'], 'industry': 'AI Research', 'location': 'San Francisco, US', 'announced_date': '2023-08-01', 'description': 'Imbue raises $200M Series B to build reliable AI reasoning agents', 'valuation_display': '$1B'},
    {'id': 'stability-101m-2022', 'company_name': 'Stability AI', 'funding_amount_m': 101, 'funding_display': '$101M', 'round_type': 'Seed', 'investors': ['Coatue', "O'Reilly AlphaTech", 'Lightspeed'], 'industry': 'AI Foundation Models', 'location': 'London, UK', 'announced_date': '2022-10-17', 'description': 'Stability AI raises $101M Seed at $1B valuation, maker of Stable Diffusion', 'valuation_display': '$1B'},
    {'id': 'cohere-270m-2022', 'company_name': 'Cohere', 'funding_amount_m': 270, 'funding_display': '$270M', 'round_type': 'Series C', 'investors': ['Nvidia', 'Oracle', 'SAP', 'Tiger Global'], 'industry': 'AI Enterprise', 'location': 'Toronto, Canada', 'announced_date': '2022-06-01', 'description': 'Cohere raises $270M Series C to scale enterprise NLP platform', 'valuation_display': '$2.1B'},
    {'id': 'deepseek-strategic-2024', 'company_name': 'DeepSeek', 'funding_amount_m': 1_000, 'funding_display': '~$1B', 'round_type': 'Strategic', 'investors': ['High-Flyer Capital (quant fund)'], 'industry': 'AI Foundation Models', 'location': 'Hangzhou, China', 'announced_date': '2024-01-01', 'description': 'DeepSeek funded by Chinese quant hedge fund High-Flyer, shocked global AI community with DeepSeek R1', 'valuation_display': 'N/A'},
]


def seed_rounds() -> List[FundingRoundSchema]:
    return [FundingRoundSchema(**row, is_seed_data=True) for row in SEED_ROUNDS]


def seed_funding_data(store, force: bool = False) -> int:
    """
    Insert the curated rounds

    Skipped when any seed row already exists, unless forced.

    Returns:
        Number of rounds written
    """
    if not force and store.is_seeded():
        return 0

    count = 0
    for funding_round in seed_rounds():
        try:
            store.upsert_funding_round(funding_round)
            count += 1
        except Exception as e:
            logger.error(f"[Funding] Failed to seed {funding_round.id}: {e}")

    logger.info(f"[Funding] Seeded {count} curated rounds")
    return count
