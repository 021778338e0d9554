# Path: anki_paste/services/prompt_builder.py
"""
Sinh prompt cho LLM để tạo flashcard đúng định dạng mà parser chấp nhận.
Nội dung prompt giữ nguyên tiếng Bồ Đào Nha (ngôn ngữ của người dùng cuối).
"""
from enum import Enum
from typing import Dict

from anki_paste.models.model_format import Delimiter

__all__ = ["CardStyle", "CARD_EXPLANATIONS", "build_prompt"]

class CardStyle(str, Enum):
    BASIC = "Básico"
    REVERSED = "Invertido"
    CLOZE = "Ocultação (Cloze)"
    TYPING = "Escrita"

CARD_EXPLANATIONS: Dict[CardStyle, str] = {
    CardStyle.BASIC: "Formato simples de Pergunta;Resposta (Frente;Verso).",
    CardStyle.REVERSED: (
        "Formato de Pergunta;Resposta, mas a IA deve criar questões que funcionem bem "
        "se as cartas forem invertidas (Verso;Frente)."
    ),
    CardStyle.TYPING: (
        'Formato de Pergunta;Resposta, onde a "Resposta" deve ser uma palavra ou frase '
        "concisa para digitação."
    ),
    CardStyle.CLOZE: (
        'A IA deve usar a sintaxe do Anki para ocultação de palavras: "Texto com '
        '{{c1::palavra oculta}}". O formato final deve ser: '
        "Texto com Ocultação{{DELIMITADOR}}Verso Extra{{DELIMITADOR}}Tags."
    ),
}

PROMPT_TEMPLATE = """
A partir de agora e durante toda essa conversa atue como um Especialista em Aprendizagem e Flashcards (Anki).
Seu objetivo é converter o texto que eu enviar em flashcards otimizados para memorização ativa e repetição espaçada.

REGRAS DE FORMATAÇÃO (CRÍTICO):
1. A saída deve ser exclusivamente um bloco de código (tabela).
2. O formato de saída deve ser compatível com importação CSV.
3. O delimitador de colunas DEVE ser o {{DELIMITADOR}}.
4. **IMPORTANTE:** Se a coluna "Tags" for incluída, as tags individuais dentro dessa coluna devem ser separadas por **espaço** ou **vírgula** (ex: Tag1,Tag2 ou Tag1 Tag2).
5. Não utilize ";" a não ser que seja o {{DELIMITADOR}}.

FORMATO:
{{FORMATO_FINAL}}

INSTRUÇÃO DE GERAÇÃO:
* O formato das questões deve ser: {{MODELO_DE_CARD}}.
* Que consiste em: {{EXPLICACAO_MODELO}}
* {{INSTRUCAO_ESPECIFICA_CLOZE}}
* Se houver necessidade de usar o delimitador dentro das perguntas ou respostas, utilize o caractere de escape: "\\{{DELIMITADOR}}" antes dele.
* Gere os flashcards em Português Brasileiro

CONTEÚDO:
Se não for instruído quantos flashcards devem ser gerados, garanta que há flashcards suficientes para abordar o ponto central do conteúdo (mínimo 5).


[COLE SEU MATERIAL AQUI]
"""

def build_prompt(card_style: CardStyle, delimiter: Delimiter, include_tags: bool = True) -> str:
    """Điền các placeholder của PROMPT_TEMPLATE theo lựa chọn của người dùng."""
    d = delimiter.value

    if card_style == CardStyle.CLOZE:
        columns = ["Texto com Ocultação", "Verso Extra"]
        cloze_instruction = (
            f"Para o modelo de Ocultação, use o formato: Texto com {{{{c1::cloze}}}}{d}Verso Extra{d}[Tags]."
        )
    else:
        columns = ["Frente", "Verso"]
        cloze_instruction = ""

    if include_tags:
        columns.append("Tags (Opcional)")

    final_format = d.join(columns) + "\n[... Mais linhas]"

    prompt = PROMPT_TEMPLATE
    prompt = prompt.replace("{{FORMATO_FINAL}}", final_format)
    prompt = prompt.replace("{{MODELO_DE_CARD}}", card_style.value)
    prompt = prompt.replace("{{EXPLICACAO_MODELO}}", CARD_EXPLANATIONS[card_style])
    prompt = prompt.replace("{{INSTRUCAO_ESPECIFICA_CLOZE}}", cloze_instruction)
    # Escape trước, delimiter thường sau
    prompt = prompt.replace("\\{{DELIMITADOR}}", f"\\{d}")
    prompt = prompt.replace("{{DELIMITADOR}}", d)

    return prompt.strip()
