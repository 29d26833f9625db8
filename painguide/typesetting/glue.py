"""Post-layout typographic fixes executed inside the rendered page.

Line-wrap positions depend on real font metrics, so this pass runs against the
live DOM in Chromium after the document has been laid out at its final width.
Only elements inside ``main.guide-content`` are touched, and anything under a
finished ``.bibliography`` list is left alone.
"""

from __future__ import annotations

import logging
from typing import Any

from painguide.models.pdf import GlueReport

logger = logging.getLogger(__name__)

MIN_BIBLIOGRAPHY_ITEMS = 5

GLUE_SCRIPT = r"""
() => {
  const report = {
    container_found: false, br_elements: 0, literal_br: 0, tokenized: 0,
    round_trip_mismatches: 0, cites: 0, glues: 0, tail_glues: 0, bib_items: 0,
  };
  const root = document.querySelector('main.guide-content');
  report.bib_items = document.querySelectorAll('.bibliography li').length;
  if (!root) return report;
  report.container_found = true;

  const TOLERANCE = 0.75;
  const BLOCK_TAGS = new Set(['P', 'DIV', 'UL', 'OL', 'LI', 'TABLE', 'BLOCKQUOTE', 'PRE',
    'H1', 'H2', 'H3', 'H4', 'H5', 'H6', 'SECTION', 'FIGURE', 'HR']);
  const LITERAL_BR = [
    /&amp;lt;\s*br\s*\/?\s*&amp;gt;/gi,
    /&lt;\s*br\s*\/?\s*&gt;/gi,
    /&lt;\s*br\s*\/?\s*>/gi,
    /<\s*br\s*\/?\s*&gt;/gi,
    /<\s*br\s*\/?\s*>/gi,
  ];

  const inBibliography = (el) => !!(el && el.closest && el.closest('.bibliography, ol.bibliography'));
  const targets = () => Array.from(root.querySelectorAll('p, li')).filter((el) => !inBibliography(el));
  const isWord = (n) => !!n && (n.classList.contains('t') || n.classList.contains('inline'));
  const isSpace = (n) => !!n && n.classList.contains('ws');
  const isUnit = (n) => isWord(n) || (!!n && (n.classList.contains('cite') || n.classList.contains('glue')));
  const tokens = (el) => Array.from(el.children).filter(
    (n) => n.classList.contains('t') || n.classList.contains('ws') || n.classList.contains('inline')
      || n.classList.contains('cite') || n.classList.contains('glue'));

  function makeToken(cls, text) {
    const span = document.createElement('span');
    span.className = cls + ' tokenized';
    span.textContent = text;
    return span;
  }

  // 1. line-break artifacts
  root.querySelectorAll('br').forEach((br) => {
    if (!inBibliography(br)) br.replaceWith(' ');
  });
  const walker = document.createTreeWalker(root, NodeFilter.SHOW_TEXT);
  const hits = [];
  while (walker.nextNode()) {
    const node = walker.currentNode;
    if (inBibliography(node.parentElement)) continue;
    if (LITERAL_BR.some((re) => { re.lastIndex = 0; return re.test(node.nodeValue || ''); })) hits.push(node);
  }
  hits.forEach((node) => {
    let value = node.nodeValue || '';
    LITERAL_BR.forEach((re) => { value = value.replace(re, ' '); });
    node.nodeValue = value;
  });

  // 2. word / whitespace / inline tokens
  function tokenize(el) {
    const before = el.textContent;
    const frag = document.createDocumentFragment();
    for (const node of Array.from(el.childNodes)) {
      if (node.nodeType === Node.TEXT_NODE) {
        const parts = (node.nodeValue || '').match(/(\s+|\S+)/g) || [];
        parts.forEach((part) => frag.appendChild(makeToken(/^\s+$/.test(part) ? 'ws' : 't', part)));
      } else if (node.nodeType === Node.ELEMENT_NODE) {
        const wrapper = document.createElement('span');
        wrapper.className = 'inline tokenized';
        wrapper.appendChild(node);
        frag.appendChild(wrapper);
      }
    }
    el.replaceChildren(frag);
    report.tokenized += 1;
    if (el.textContent !== before) report.round_trip_mismatches += 1;
  }
  targets().forEach((el) => {
    if (el.querySelector('.tokenized')) return;
    if (Array.from(el.children).some((child) => BLOCK_TAGS.has(child.tagName))) return;
    tokenize(el);
  });

  // 3. bracketed citations
  function groupCitations(el) {
    const toks = tokens(el);
    for (let i = 0; i < toks.length; i++) {
      if (!isWord(toks[i]) || !(toks[i].textContent || '').startsWith('[')) continue;
      let j = i;
      while (j < toks.length && j - i < 24 && !/\][.,;:!?)]*$/.test(toks[j].textContent || '')) j++;
      if (j >= toks.length || j - i >= 24) continue;
      const cite = document.createElement('span');
      cite.className = 'cite';
      el.insertBefore(cite, toks[i]);
      for (let k = i; k <= j; k++) cite.appendChild(toks[k]);
      report.cites += 1;
      i = j;
    }
  }
  targets().forEach((el) => { if (el.querySelector(':scope > .tokenized')) groupCitations(el); });

  // 4. space before "(" glued to a preceding word
  function spaceBeforeParen(el) {
    tokens(el).forEach((tok) => {
      if (!tok.classList.contains('t')) return;
      const text = tok.textContent || '';
      const inner = text.match(/^([A-Za-z]{3,})(\([^)]{3,}.*)$/);
      if (inner) {
        tok.textContent = inner[1];
        tok.after(makeToken('ws', ' '), makeToken('t', inner[2]));
      }
    });
    const toks = tokens(el);
    for (let i = 1; i < toks.length; i++) {
      if (isWord(toks[i]) && (toks[i].textContent || '').startsWith('(') && isUnit(toks[i - 1])) {
        toks[i].before(makeToken('ws', ' '));
      }
    }
  }

  function sameLine(a, b) {
    const ra = a.getClientRects();
    const rb = b.getClientRects();
    return ra.length > 0 && rb.length > 0 && Math.abs(ra[ra.length - 1].top - rb[0].top) < TOLERANCE;
  }

  function glueNodes(nodes) {
    if (!nodes.length || inBibliography(nodes[0])) return null;
    const glue = document.createElement('span');
    glue.className = 'nowrap glue';
    nodes[0].before(glue);
    nodes.forEach((n) => glue.appendChild(n));
    report.glues += 1;
    return glue;
  }

  // 5. keep each citation on the line of the words before it
  function glueCitations(el) {
    el.querySelectorAll(':scope > .cite').forEach((cite) => {
      const group = [];
      let ptr = cite.previousElementSibling;
      let words = 0;
      while (ptr && words < 4) {
        if (isWord(ptr)) {
          words += 1;
          group.unshift(ptr);
        } else if (isSpace(ptr)) {
          group.unshift(ptr);
        } else {
          break;
        }
        ptr = ptr.previousElementSibling;
      }
      while (group.length && isSpace(group[0])) group.shift();
      if (!group.length) return;
      group.push(cite);
      const glue = glueNodes(group);
      let attempts = 0;
      while (glue && attempts < 3 && !sameLine(glue.firstElementChild, glue.lastElementChild)) {
        let before = glue.previousElementSibling;
        const moving = [];
        while (before && isSpace(before)) { moving.unshift(before); before = before.previousElementSibling; }
        if (!before || !isWord(before)) break;
        moving.unshift(before);
        moving.reverse().forEach((n) => glue.insertBefore(n, glue.firstChild));
        attempts += 1;
      }
    });
  }

  // 6. no lonely one-to-three word last lines
  function lastTop(n) {
    const rects = n.getClientRects();
    return rects.length ? rects[rects.length - 1].top : null;
  }
  function glueTail(el) {
    const toks = tokens(el);
    const units = toks.filter(isUnit);
    if (units.length < 2) return;
    const tops = units.map(lastTop).filter((top) => top !== null);
    if (!tops.length) return;
    const maxTop = Math.max(...tops);
    const minTop = Math.min(...tops);
    if (Math.abs(maxTop - minTop) < TOLERANCE) return;
    const onLastLine = units.filter((n) => {
      const top = lastTop(n);
      return top !== null && Math.abs(top - maxTop) < TOLERANCE;
    });
    if (onLastLine.length < 1 || onLastLine.length > 3) return;
    const start = toks.indexOf(units.slice(-4)[0]);
    if (glueNodes(toks.slice(start))) report.tail_glues += 1;
  }

  targets().forEach((el) => {
    if (!el.querySelector(':scope > .tokenized, :scope > .cite')) return;
    spaceBeforeParen(el);
    glueCitations(el);
    glueTail(el);
  });

  // 7. read-only diagnostics
  report.br_elements = root.querySelectorAll('br').length;
  report.literal_br = ((root.textContent || '').match(/<\s*br|&lt;\s*br/gi) || []).length;
  report.bib_items = document.querySelectorAll('.bibliography li').length;
  return report;
}
"""


def build_report(raw: dict[str, Any]) -> GlueReport:
    report = GlueReport(**raw)
    if not report.container_found:
        report.warnings.append("content container not found; glue skipped")
    if report.br_elements or report.literal_br:
        report.warnings.append(
            f"line-break artifacts remain ({report.br_elements} elements, {report.literal_br} literal)"
        )
    if report.round_trip_mismatches:
        report.warnings.append(f"{report.round_trip_mismatches} elements changed text while tokenizing")
    if report.bib_items < MIN_BIBLIOGRAPHY_ITEMS:
        report.warnings.append(f"bibliography has only {report.bib_items} items")
    return report


async def run_glue(page) -> GlueReport:
    """Apply the glue pass to the loaded page and log its diagnostics."""
    report = build_report(await page.evaluate(GLUE_SCRIPT))
    logger.info(
        "Glue pass: tokenized=%s cites=%s glues=%s tail_glues=%s bib_items=%s",
        report.tokenized,
        report.cites,
        report.glues,
        report.tail_glues,
        report.bib_items,
    )
    for warning in report.warnings:
        logger.warning("Glue check: %s", warning)
    return report
