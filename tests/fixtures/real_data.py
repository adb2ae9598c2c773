"""
Real-world test data for difusa testing.

Contains realistic examples of:
- Municipal service records (name, description, keyword tags)
- Typo'd and accent-less queries people actually type
- Suggestion terms with case and accent duplicates
"""

# Municipal service records as returned by the services catalogue
SERVICIOS = [
    {
        "nombre": "Certificado de Residencia",
        "descripcion": "Documento oficial que certifica el lugar de residencia del ciudadano.",
        "tags": ["certificado", "residencia", "documento"],
    },
    {
        "nombre": "Licencia de Construcción",
        "descripcion": "Permiso para realizar obras de construcción en predios urbanos.",
        "tags": ["licencia", "construcción", "permiso", "obras"],
    },
    {
        "nombre": "Impuesto Predial",
        "descripcion": "Consulta y pago del impuesto predial unificado.",
        "tags": ["impuesto", "predial", "pago"],
    },
    {
        "nombre": "Estratificación Socioeconómica",
        "descripcion": "Solicitud de revisión del estrato asignado a una vivienda.",
        "tags": ["estrato", "vivienda"],
    },
    {
        "nombre": "PQRS",
        "descripcion": "Peticiones, quejas, reclamos y sugerencias ciudadanas.",
        "tags": ["peticiones", "quejas", "reclamos"],
    },
    {
        "nombre": "Registro de Mascotas",
        "descripcion": "Inscripción de perros y gatos en el censo municipal.",
        "tags": ["mascotas", "animales"],
    },
]

# (typed query, name the user was looking for)
TYPO_QUERIES = [
    ("certificao", "Certificado de Residencia"),
    ("licensia", "Licencia de Construcción"),
    ("construccion", "Licencia de Construcción"),
    ("impuesto predal", "Impuesto Predial"),
    ("estratificacion", "Estratificación Socioeconómica"),
    ("mascota", "Registro de Mascotas"),
]

# Accented text and its folded form
ACCENT_PAIRS = [
    ("Trámite", "tramite"),
    ("Construcción", "construccion"),
    ("Estratificación Socioeconómica", "estratificacion socioeconomica"),
    ("Niño", "nino"),
    ("CAFÉ", "cafe"),
    ("Inscripción", "inscripcion"),
    ("pingüino", "pinguino"),
]

# Flat suggestion terms with case/accent duplicates
TERMINOS = [
    "Licencia",
    "licencia",
    "LICENCIA",
    "Licencia de Construcción",
    "licencia de construccion",
    "Certificado",
    "Certificado de Residencia",
    "Trámite",
    "tramite",
    "PQRS",
    "Impuesto Predial",
]
