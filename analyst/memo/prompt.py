'''
Memo prompt construction.

The memo writer gets a fixed system directive, the memo template and the
analyst context serialized as JSON. The {{...}} placeholders in the template
are left for the writer to fill from the JSON; nothing is substituted here.
'''

from analyst.domain.types import AnalystContext

SYSTEM_PROMPT = '''
You are a buy-side Fundamental Analyst Agent. Your job is to produce an \
auditable FCFF-DCF valuation and a 1-2 page investment memo for {ticker} with \
a focus on capital structure and WACC. You must use tools for all numeric \
computations. You must never fabricate numbers. If a metric is missing, state \
it is unavailable and add it to limitations. Your memo must only use numbers \
contained in the provided context object. Use conditional language and \
explicitly disclose approximations (e.g., book debt proxy, Kd assumption, \
FCFF proxy).
'''

MEMO_TEMPLATE = '''
Output the final memo in Markdown exactly following the memo template headings:

### Title
**{ticker} - Fundamental Analyst Memo (FCFF DCF & Capital Structure)**
Date (UTC): {{{{meta.generated_at_utc}}}}
Data source: {{{{meta.source}}}} (cache_used={{{{meta.cache_used}}}})

### 1) Executive Summary
- Recommendation (e.g., Buy/Hold/Sell) with conditional language.
- Intrinsic value (base) and upside/downside vs spot (if available).
- One-paragraph rationale referencing **only** context numbers.

### 2) Business & Financial Snapshot (Evidence-based)
- Brief business positioning (sector/industry) if available.
- FCF history trend (use fcf_history summary).
- Any key stability/volatility note if computed.

### 3) Capital Structure & WACC (MANDATORY)
**Capital Structure**
- Equity (market cap E): {{{{capital_structure.equity_market_value_E}}}}
- Debt (book D): {{{{capital_structure.debt_book_value_D}}}}  (state proxy \
assumption if applicable)
- Cash: {{{{capital_structure.cash_and_equivalents}}}}
- Net debt: {{{{capital_structure.net_debt}}}}
- Weights: wE={{{{wacc.weights.w_e}}}}, wD={{{{wacc.weights.w_d}}}}

**Cost of Equity (CAPM)**
- rf={{{{wacc.rf}}}}, ERP={{{{wacc.erp}}}}, beta={{{{wacc.beta_used}}}}
- Ke={{{{wacc.cost_of_equity_ke}}}}
Explain why rf is user-input; explain beta source/override if used.

**Cost of Debt & Tax Shield**
- Kd={{{{wacc.cost_of_debt_kd}}}} and effective tax rate \
T={{{{wacc.tax_rate_effective}}}}
- After-tax Kd = Kd(1-T) (do NOT compute if not provided by tools; only \
reference tool outputs)

**WACC**
- WACC (base)={{{{wacc.wacc}}}}
- Brief sensitivity intuition: valuation impact when WACC changes (reference \
sensitivity block).

### 4) Valuation (FCFF DCF)
- Method: {{{{fcf.method}}}}
- FCF0: {{{{fcf.fcf0_latest}}}}
- Assumptions: years={{{{inputs.forecast_years}}}}, \
growth={{{{inputs.fcf_growth}}}}, terminal g={{{{inputs.terminal_g}}}}, \
WACC={{{{wacc.wacc}}}}
- **SCENARIO TABLE**:
  Create a standard Markdown table with proper header and alignment rows \
(e.g. `|---|---|...`) for the Base/Bull/Bear scenarios.
  Columns: **Scenario**, **WACC**, **FCF Growth**, **Value Per Share**, \
**Upside/Downside**.
  Ensure there is an empty line before and after the table.
- WACC x g sensitivity: describe key ranges (do not invent numbers).

### 5) Risks & Limitations
- List risks tied to assumptions (WACC, growth, terminal g).
- List limitations EXACTLY from context.limitations (no new claims).

### 6) Appendix: Data Notes
- Cache file used (if provided)
- Timestamp and source
- Any warnings flagged by tools
'''


def build_system_prompt(context: AnalystContext) -> str:
  return SYSTEM_PROMPT.format(ticker=context.meta.ticker)


def build_prompt(context: AnalystContext) -> str:
  '''
  Build the user prompt: memo template followed by the context JSON.

  Args:
    context: Analyst context to embed

  Returns:
    Prompt text
  '''
  template = MEMO_TEMPLATE.format(ticker=context.meta.ticker)
  return (f'{template}\n'
          'Here is the DATA CONTEXT you MUST use. Do not use outside data:\n'
          f'```json\n{context.to_json()}\n```\n')
