"""Prompt template for task prioritization.

The template has two %s slots: the compact JSON request, then OUTPUT_STUB.
The model continues the stub, so its raw reply is only the tail of a JSON
document and must be decoded with the stub put back in front.
"""

OUTPUT_STUB = '{"tasks": ['

PRIORITIZE_TEMPLATE = """You are a planning assistant. Below is a JSON object with today's focus and a list of open tasks. Each task has a short id, a name and markdown notes.

Order the tasks in the sequence they should be worked on, putting work that matches today's focus first, and estimate how many minutes each task will take.

Answer with a single line of JSON of the form {"tasks": [{"id": "<id>", "minutes": <int>}, ...]} that lists every task id exactly once.

Input:
%s

Output:
%s"""
