"""
Pipeline de ingestão de planilhas de cotação.

Este módulo contém o motor determinístico que transforma uma planilha sem
esquema fixo em itens de cotação validados:
- money.py: valores monetários em formato local ambíguo
- noise.py: linhas que não são produtos (totais, notas, números soltos)
- header_detector.py: linha de cabeçalho
- column_detector.py: papéis das colunas
- unit_inference.py: unidade do preço
- extractor.py: itens por linha
- pipeline.py: agregação de todas as abas
"""
