"""
Natural-language sales insights via AWS Bedrock.

The summary sent to the model is bounded: the most recent sales reduced to
date/amount/customer, the product list reduced to name/stock/price and the
goals as stored. The call is advisory only; any failure is logged and turned
into FALLBACK_MESSAGE so callers never see an exception.
"""
import json
import logging
from typing import Any, Dict, Optional

import boto3

from models.state import date_key, round_half_up, today_iso
from utils.file_manager import read_config

LOG = logging.getLogger(__name__)

DEFAULT_QUERY = "Provide 3 key actionable insights to improve revenue and inventory management."
FALLBACK_MESSAGE = "Unable to generate insights at this time. Please check your API key or try again later."

def summarize_state(state: Dict, max_sales: int = 50) -> Dict[str, Any]:
    return {
        "sales": [
            {
                "date": date_key(s["date"]),
                "amount": round_half_up(s["totalAmount"]),
                "customer": s["customerName"],
            }
            for s in state["sales"][:max_sales]
        ],
        "products": [
            {"name": p["name"], "stock": p["stock"], "price": p["price"]}
            for p in state["products"]
        ],
        "goals": state["goals"],
    }

def build_prompt(state: Dict, query: Optional[str] = None, today: Optional[str] = None,
                 max_sales: int = 50) -> str:
    summary = summarize_state(state, max_sales)
    return (
        "You are an expert Sales Analyst AI.\n"
        "Analyze the following sales data JSON summary.\n\n"
        f"Current Date: {today or today_iso()}\n\n"
        "Data Summary:\n"
        f"- Sales (last {max_sales}): {json.dumps(summary['sales'])}\n"
        f"- Products: {json.dumps(summary['products'])}\n"
        f"- Goals: {json.dumps(summary['goals'])}\n\n"
        f"User Query: {query or DEFAULT_QUERY}\n\n"
        "Format your response as a clean, markdown-formatted list of insights. "
        "Keep it professional and concise."
    )

def _extract_text(response) -> str:
    result = json.loads(response["body"].read())
    text = result["output"]["message"]["content"][0]["text"]
    if not text:
        raise ValueError("Empty model response")
    return text

def generate_insights(state: Dict, query: Optional[str] = None, client=None,
                      settings: Optional[Dict] = None) -> str:
    """Return markdown insights for the state, or FALLBACK_MESSAGE on any failure."""
    try:
        settings = settings or read_config()["insights"]
        prompt = build_prompt(state, query, max_sales=int(settings["max_sales"]))
        client = client or boto3.client("bedrock-runtime", region_name=settings["region_name"])
        response = client.invoke_model(
            modelId=settings["model_id"],
            contentType="application/json",
            accept="application/json",
            body=json.dumps(
                {
                    "messages": [{"role": "user", "content": [{"text": prompt}]}],
                    "inferenceConfig": {
                        "max_new_tokens": int(settings["max_tokens"]),
                        "temperature": float(settings["temperature"]),
                    },
                }
            ),
        )
        return _extract_text(response)
    except Exception as e:
        # credential and service failures alike
        LOG.error("Insight generation failed: %s", e)
        return FALLBACK_MESSAGE
