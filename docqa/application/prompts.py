# docqa/application/prompts.py

from typing import List, Tuple


PROMPT_TEMPLATE = """You are an expert assistant that answers questions based solely on the provided context documents.

INSTRUCTIONS:
1. Answer the question using ONLY the information from the provided context
2. Be concise but comprehensive
3. If you quote or reference specific information, indicate which document it came from
4. If the context doesn't contain enough information to answer the question, say so clearly
5. Do not add information not present in the context
6. Focus on accuracy and relevance

CONTEXT DOCUMENTS:
{context}

QUESTION: {query}

ANSWER (be specific and cite sources):"""


def build_context(passages: List[Tuple[str, str]]) -> str:
    """Format (document_name, chunk_text) pairs into one context block."""
    return "".join(
        f"Document: {name}\nContent: {text}\n\n"
        for name, text in passages
    )


def build_prompt(query: str, context: str) -> str:
    return PROMPT_TEMPLATE.format(context=context, query=query)
