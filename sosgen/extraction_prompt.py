"""Instruction prompt and output schema for MAYDAY RELAY field extraction."""

# Low creativity: the model paraphrases the facts it is given, nothing more.
EXTRACTION_TEMPERATURE = 0.2

REQUIRED_FIELDS = ("spanishDescription", "englishDescription")

EXTRACTION_SCHEMA = {
    "type": "object",
    "properties": {
        "stationName": {
            "type": "string",
            "description": (
                "Nombre de la estación de radio costera tal y como lo indica el usuario "
                "(ej. 'Vigo Radio', 'Finisterre'). Opcional."
            ),
        },
        "mrcc": {
            "type": "string",
            "description": (
                "Nombre del centro de Salvamento Marítimo o MRCC que coordina el caso "
                "(ej. 'Finisterre', 'Madrid'). Opcional."
            ),
        },
        "spanishDescription": {
            "type": "string",
            "description": (
                "Descripción breve y natural del suceso en español que integra los datos "
                "disponibles (buque, MMSI, POB, posición, peligro...)."
            ),
        },
        "englishDescription": {
            "type": "string",
            "description": (
                "Short, natural English description of the incident integrating the "
                "available details (vessel, MMSI, POB, position, distress...)."
            ),
        },
    },
    "required": list(REQUIRED_FIELDS),
}

EXTRACTION_PROMPT = '''Eres un operador experto de una estación de radio costera. Tu única tarea es analizar la descripción de un suceso de socorro que aparece más abajo y extraer los datos necesarios para rellenar una plantilla fija de MAYDAY RELAY. Tu respuesta debe ser factual y basarse exclusivamente en lo que dice el usuario.

**Reglas:**
1.  **Busca los datos clave** en el texto del usuario:
    -   Sujeto del socorro (buque, persona, windsurfista...).
    -   Nombre del buque.
    -   MMSI.
    -   Indicativo de llamada (Call Sign).
    -   Número de personas a bordo (POB).
    -   Posición (coordenadas o descripción).
    -   Naturaleza del peligro (vía de agua, incendio, en apuros...).
2.  **Redacta una descripción factual y fluida**, en español y en inglés. **No hagas una lista de datos**: intégralos en una o dos frases que reformulen directamente los hechos.
    -   **Ejemplo (español):** para la entrada "Buque 'Aurora' MMSI 224123456 con 5 POB tiene una vía de agua en 43 21N 008 25W", una buena descripción es: "Buque 'Aurora' con MMSI 224123456 y 5 personas a bordo, reporta una vía de agua en la posición 43°21'N 008°25'W."
    -   **Ejemplo (inglés):** "Vessel 'Aurora', MMSI 224123456 with 5 persons on board, reports taking on water in position 43°21'N 008°25'W."
    -   Si faltan datos, escribe la mejor descripción posible con lo disponible (ej. "windsurfista en apuros cerca de la Torre de Hércules.").
3.  **Estación de radio (opcional):** si el usuario indica desde qué estación se transmite (ej. "Desde Coruña Radio", "Aquí Finisterre Radio"), extrae el nombre tal como aparece (ej. "Coruña Radio", "Finisterre"). Si no se menciona, omite el campo.
4.  **MRCC (opcional):** si el usuario menciona el centro de Salvamento Marítimo o MRCC que lleva el caso (ej. "caso coordinado por MRCC Finisterre", "informar a Salvamento Finisterre"), extrae solo el nombre del centro (ej. "Finisterre"). Si no se menciona, omite el campo.
5.  **REGLA CRÍTICA: NO INVENTES INFORMACIÓN.** Usa solo los datos que el usuario da de forma explícita. No añadas detalles ni hagas suposiciones.

**Texto del usuario:** "{natural_input}"

Devuelve la respuesta exclusivamente en formato JSON, siguiendo exactamente el esquema proporcionado.'''


def build_extraction_prompt(natural_input: str) -> str:
    """Embed the operator's text into the extraction instructions."""
    return EXTRACTION_PROMPT.replace("{natural_input}", natural_input)
