"""Instruções e exemplos fixos enviados ao serviço de avaliação."""

from src.domain.assessment import CARREIRAS_PERMITIDAS


PROMPT_SISTEMA = (
    "You are an expert career counsellor. Output ONLY a single JSON object with keys: "
    "\"risk\" (one of HIGH, MEDIUM, LOW), "
    "\"career\" (one of: "
    + ", ".join(f"\"{carreira}\"" for carreira in CARREIRAS_PERMITIDAS)
    + "), and \"explanation\" (brief). "
    "Do NOT output the token \"Unknown\" or empty career - always pick the best matching "
    "career from the allowed list. "
    "Do not output anything outside the single JSON object. "
    "Decide based on marks across subjects and attendance. "
    "Prefer non-engineering if languages/arts scores are clearly highest. "
    "Use clear, concise explanations referencing top subjects and attendance."
)

# Pares (usuário, assistente) que ancoram o formato e calibram casos limítrofes.
EXEMPLOS_FIXOS = [
    (
        'Student: {"roll":101,"name":"Alice","marks":[95,90,88,96,80],"attendance":92}',
        '{"risk":"LOW","career":"Computer Science",'
        '"explanation":"Very high CS and Math marks with high attendance; excellent fit for CS."}',
    ),
    (
        'Student: {"roll":102,"name":"Bob","marks":[48,50,45,30,92],"attendance":88}',
        '{"risk":"MEDIUM","career":"Arts / Humanities",'
        '"explanation":"Very strong English with weaker STEM marks; '
        'recommend Arts/Humanities or language-related fields."}',
    ),
    (
        'Student: {"roll":103,"name":"Carol","marks":[72,68,65,70,85],"attendance":90}',
        '{"risk":"LOW","career":"Management",'
        '"explanation":"Balanced marks with strong English and good overall scores; '
        'suitable for Management/business studies."}',
    ),
]

TEMPLATE_PEDIDO = "Student: {estudante_json}\nReturn JSON as specified above."
