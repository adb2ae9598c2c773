# %% [markdown]
# # difusa: Quickstart
#
# **Typo-tolerant search for Spanish text** - from one keystroke to a full catalogue
#
# ---
#
# ## The Problem
#
# People searching a services portal type fast, skip accents and misspell words:
#
# ```
# "certificao"      vs  "Certificado de Residencia"
# "licensia"        vs  "Licencia de Construcción"
# "tramite"         vs  "Trámite"
# ```
#
# **difusa** finds what they meant and suggests what to type next.
#
# ---
#
# ## Table of Contents
#
# | Part | Topic | Description |
# |------|-------|-------------|
# | 1 | Search | Multi-field fuzzy search over records |
# | 2 | Suggestions | Autocomplete from terms and records |
# | 3 | Building Blocks | Distance, similarity, normalization |
# | 4 | Configuration | Thresholds, distance caps, accents |
# | 5 | At Scale | Batch helpers, sharded search, Polars |

# %%
import time

import polars as pl

import difusa as df
from difusa import Field, FuzzyConfig

servicios = [
    {
        "nombre": "Certificado de Residencia",
        "descripcion": "Documento oficial que certifica el lugar de residencia.",
        "tags": ["certificado", "residencia", "documento"],
    },
    {
        "nombre": "Licencia de Construcción",
        "descripcion": "Permiso para realizar obras de construcción.",
        "tags": ["licencia", "construcción", "permiso", "obras"],
    },
    {
        "nombre": "Impuesto Predial",
        "descripcion": "Consulta y pago del impuesto predial unificado.",
        "tags": ["impuesto", "predial", "pago"],
    },
]

# %% [markdown]
# ---
# ## Part 1: Search
#
# Each searchable field is a named accessor. A record matches when any field
# matches; its score is the best field score.

# %%
fields = [Field.key("nombre"), Field.key("descripcion")]

for query in ["certificao", "licensia", "predal"]:
    results = df.fuzzy_search(query, servicios, fields)
    print(f"{query!r}:")
    for r in results:
        campos = ", ".join(f"{m.field}={m.score:.2f}" for m in r.matches)
        print(f"    {r.score:.2f}  {r.item['nombre']}  ({campos})")

# %% [markdown]
# ---
# ## Part 2: Suggestions
#
# Flat term lists are ranked and deduplicated ignoring case and accents.
# Records contribute their name, their tags and the longer words of their
# description, each with its own minimum score.

# %%
terminos = ["Licencia", "licencia", "LICENCIA", "Licencia de Construcción", "PQRS"]
print(df.generate_fuzzy_suggestions("lic", terminos, max_results=5))

print(df.enhanced_search_suggestions("construccion", servicios, 5))
print(df.enhanced_search_suggestions("c", servicios, 5))  # too short: []

# %% [markdown]
# ---
# ## Part 3: Building Blocks

# %%
print(df.levenshtein_distance("certificado", "certificao"))  # 1
print(df.levenshtein_bounded("abcdef", "ghijkl", max_distance=3))  # None
print(df.partial_levenshtein("licensia", "licencia de construccion"))  # 1
print(df.calculate_similarity("hello", "helo"))  # 0.8
print(df.normalize_for_search("  ¿Dónde   está el Trámite? "))  # 'donde esta el tramite'

# %% [markdown]
# ---
# ## Part 4: Configuration
#
# `FuzzyConfig` is frozen and validated when built. Pass it explicitly.

# %%
estricta = FuzzyConfig(threshold=0.8, max_distance=2)
print(df.fuzzy_match("hello", "world", estricta))
print(df.fuzzy_match("tramite", "Trámite", FuzzyConfig(normalize_accents=False)))

# Mappings with camelCase keys are accepted too
print(FuzzyConfig.from_dict({"threshold": 0.6, "maxDistance": 3}))

try:
    FuzzyConfig(threshold=1.5)
except df.InvalidConfiguration as exc:
    print(f"InvalidConfiguration: {exc}")

# %% [markdown]
# ---
# ## Part 5: At Scale

# %%
catalogo = [{"nombre": f"Trámite {i}", "descripcion": f"Solicitud número {i}"} for i in range(20_000)]

start = time.perf_counter()
secuencial = df.fuzzy_search("tramite 1234", catalogo, ["nombre"])
print(f"fuzzy_search:   {len(secuencial)} results in {time.perf_counter() - start:.3f}s")

start = time.perf_counter()
por_bloques = df.batch.sharded_search("tramite 1234", catalogo, ["nombre"], shard_size=2_000)
print(f"sharded_search: {len(por_bloques)} results in {time.perf_counter() - start:.3f}s")
assert por_bloques == secuencial

# %%
frame = pl.DataFrame(servicios).drop("tags")
print(df.search_dataframe(frame, "licensia", columns=["nombre", "descripcion"]))
print(frame.with_columns(score=pl.col("nombre").fuzzy.score("certificao")))
