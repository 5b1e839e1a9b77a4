"""Support for ``aria/<accessible name>`` selectors.

Recorded user flows locate elements by accessible name, e.g.
``aria/What needs to be done?`` or ``aria/Submit[role="button"]``. Playwright
has no engine that matches on name alone, so one is registered under the
``aria`` prefix and recorded selectors are rewritten to use it.
"""

from __future__ import annotations

from playwright.async_api import Playwright

ARIA_ENGINE_NAME = "aria"
ARIA_PREFIX = "aria/"

ARIA_ENGINE_SCRIPT = """
(() => {
  const IMPLICIT_ROLES = {
    A: (el) => (el.hasAttribute("href") ? "link" : ""),
    BUTTON: () => "button",
    TEXTAREA: () => "textbox",
    SELECT: () => "combobox",
    IMG: () => "img",
    H1: () => "heading", H2: () => "heading", H3: () => "heading",
    H4: () => "heading", H5: () => "heading", H6: () => "heading",
    LI: () => "listitem",
    UL: () => "list",
    OL: () => "list",
    INPUT: (el) => {
      const type = (el.getAttribute("type") || "text").toLowerCase();
      if (type === "checkbox") return "checkbox";
      if (type === "radio") return "radio";
      if (["button", "submit", "reset"].includes(type)) return "button";
      return "textbox";
    },
  };
  const NAME_FROM_CONTENT = new Set(["button", "link", "heading", "listitem", "tab", "menuitem", "option"]);

  const squash = (value) => (value || "").replace(/\\s+/g, " ").trim();

  const roleOf = (el) => {
    const explicit = el.getAttribute("role");
    if (explicit) return explicit.split(/\\s+/)[0];
    const implicit = IMPLICIT_ROLES[el.tagName];
    return implicit ? implicit(el) : "";
  };

  const nameOf = (el) => {
    const label = el.getAttribute("aria-label");
    if (label && squash(label)) return squash(label);
    const labelledBy = el.getAttribute("aria-labelledby");
    if (labelledBy) {
      const root = el.getRootNode();
      const parts = labelledBy
        .split(/\\s+/)
        .map((id) => (root.getElementById ? root.getElementById(id) : null))
        .filter(Boolean)
        .map((node) => squash(node.textContent));
      if (parts.length) return parts.join(" ");
    }
    if (el.labels && el.labels.length) {
      return Array.from(el.labels).map((node) => squash(node.textContent)).join(" ");
    }
    for (const attr of ["placeholder", "alt", "title"]) {
      const value = el.getAttribute(attr);
      if (value && squash(value)) return squash(value);
    }
    if (NAME_FROM_CONTENT.has(roleOf(el))) return squash(el.textContent);
    return "";
  };

  const parse = (selector) => {
    const match = /^(.*?)(?:\\[role="([^"]*)"\\])?$/.exec(selector.trim());
    return { name: squash(match[1]), role: match[2] || "" };
  };

  const walk = (root, out) => {
    for (const el of root.querySelectorAll("*")) {
      out.push(el);
      if (el.shadowRoot) walk(el.shadowRoot, out);
    }
    return out;
  };

  const queryAll = (root, selector) => {
    const { name, role } = parse(selector);
    return walk(root, []).filter(
      (el) => (!name || nameOf(el) === name) && (!role || roleOf(el) === role)
    );
  };

  return {
    query: (root, selector) => queryAll(root, selector)[0] || null,
    queryAll,
  };
})()
"""


def to_playwright_selector(selector: str) -> str:
    if selector.startswith(ARIA_PREFIX):
        return f"{ARIA_ENGINE_NAME}={selector[len(ARIA_PREFIX):]}"
    return selector


async def register_selector_engines(playwright: Playwright) -> None:
    await playwright.selectors.register(ARIA_ENGINE_NAME, script=ARIA_ENGINE_SCRIPT)
