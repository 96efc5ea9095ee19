"""Prompt assembly helpers used by the generation engine.

This module is intentionally narrow: it only builds prompt strings. Request
validation, image retrieval and model invocation happen outside this module.

Design constraints:
    - Deterministic construction for identical inputs.
    - Fixed ordering of prompt components.
    - No hidden side effects (no I/O, no global state mutation).

Prompt safety model:
    - The screenshot description is model output and is interpolated verbatim.
    - Output format (no Markdown fences) is instruction-led; the engine still
      strips fences from the final result.
"""

from dataclasses import dataclass
from typing import Iterable

from screenshot_to_code.prompting.shadcn_docs import SHADCN_COMPONENTS, ShadcnComponent


# =========================================================
# DESCRIPTION PROMPT
# =========================================================
# Sent together with the screenshot to the vision model. Takes no parameters.

DESCRIPTION_PROMPT = (
    "Describe the attached screenshot in detail. I will send what you give me to a "
    "developer to recreate the original screenshot of a website that I sent you. "
    "Please listen very carefully. It's very important for my job that you follow "
    "these instructions:\n\n"
    "- Think step by step and describe the UI in great detail.\n"
    "- Make sure to describe where everything is in the UI so the developer can "
    "recreate it and if how elements are aligned\n"
    "- Pay close attention to background color, text color, font size, font family, "
    "padding, margin, border, etc. Match the colors and sizes exactly.\n"
    "- Make sure to mention every part of the screenshot including any headers, "
    "footers, sidebars, etc.\n"
    "- Make sure to use the exact text from the screenshot.\n"
)


# =========================================================
# CODING PROMPT
# =========================================================
# Prompt component order:
#   1) `CODING_INSTRUCTIONS`
#   2) Component catalog block (only when shadcn is enabled)
#   3) `LIBRARY_RESTRICTION`
#   4) Worked examples
# The screenshot description and `CODE_ONLY_SUFFIX` are appended by
# `build_code_prompt`.

CODING_INSTRUCTIONS = (
    "You are an expert frontend React developer. You will be given a description of "
    "a website from the user, and then you will return code for it using React and "
    "Tailwind CSS. Follow the instructions carefully, it is very important for my "
    "job. I will tip you $1 million if you do a good job:\n"
    "- Think carefully step by step about how to recreate the UI described in the prompt.\n"
    "- Create a React component for whatever the user asked you to create and make "
    "sure it can run by itself by using a default export\n"
    "- Feel free to have multiple components in the file, but make sure to have one "
    "main component that uses all the other components\n"
    "- Make sure the website looks exactly like the screenshot described in the prompt.\n"
    "- Pay close attention to background color, text color, font size, font family, "
    "padding, margin, border, etc. Match the colors and sizes exactly.\n"
    "- Make sure to code every part of the description including any headers, footers, etc.\n"
    "- Use the exact text from the description for the UI elements.\n"
    "- Do not add comments in the code such as \"<!-- Add other navigation links as "
    "needed -->\" and \"<!-- ... other news items ... -->\" in place of writing the "
    "full code. WRITE THE FULL CODE.\n"
    "- Repeat elements as needed to match the description. For example, if there are "
    "15 items, the code should have 15 items. DO NOT LEAVE comments like \"<!-- Repeat "
    "for each news item -->\" or bad things will happen.\n"
    "- For all images, please use an svg with a white, gray, or black background and "
    "don't try to import them locally or from the internet.\n"
    "- Make sure the React app is interactive and functional by creating state when "
    "needed and having no required props\n"
    "- If you use any imports from React like useState or useEffect, make sure to "
    "import them directly\n"
    "- Use TypeScript as the language for the React component\n"
    "- Use Tailwind classes for styling. DO NOT USE ARBITRARY VALUES (e.g. `h-[600px]`). "
    "Make sure to use a consistent color palette.\n"
    "- Use margin and padding to style the components and ensure the components are "
    "spaced out nicely\n"
    "- Please return the full React code starting with the imports, nothing else. "
    "DO NOT add any backticks or language identifiers.\n"
    "- Please ONLY return the full React code starting with the imports, nothing else. "
    "It's very important for my job that you only return the React code with imports. "
    "DO NOT START WITH a backtick fence or a language name such as typescript, "
    "javascript or tsx.\n"
    "- ONLY IF the user asks for a dashboard, graph or chart, the recharts library is "
    "available to be imported, e.g. `import { LineChart, XAxis, ... } from \"recharts\"` "
    "& `<LineChart ...><XAxis dataKey=\"name\"> ...`. Please only use this when needed.\n"
    "- If you need an icon, please create an SVG for it and use it in the code. "
    "DO NOT IMPORT AN ICON FROM A LIBRARY.\n"
    "- Make the design look nice and don't have borders around the entire website "
    "even if that's described\n"
    "- When importing shadcn components, always use absolute paths starting with "
    "\"/components/ui/\" instead of \"@/components/ui/\"\n"
)

COMPONENTS_INTRO = (
    "There are some prestyled components available for use. Please use your best "
    "judgement to use any of these components if the app calls for one.\n\n"
    "Here are the components that are available, along with how to import them, "
    "and how to use them:\n"
)

LIBRARY_RESTRICTION = "NO OTHER LIBRARIES (e.g. zod, hookform) ARE INSTALLED OR ABLE TO BE IMPORTED.\n"

EXAMPLES_INTRO = "Here are some examples of good outputs:\n"

CODE_ONLY_SUFFIX = "\nPlease ONLY return code, NO backticks or language names."


@dataclass(frozen=True)
class PromptExample:
    """Worked description -> code pair shown to the code-generation model."""

    input: str
    output: str


_LANDING_PAGE_DESCRIPTION = (
    "The UI mockup is a website design for an AI tool, featuring a clean and "
    "modern aesthetic. Here's a detailed breakdown of the design:\n\n"
    "**Header Section**\n\n"
    "* The header section is located at the top of the page and spans the full width.\n"
    "* It has a light gray background color (#F7F7F7) with a subtle shadow effect.\n"
    "* The header contains the following elements:\n"
    "\t+ A logo on the left side, which is a small black square with the text "
    "\"LOGO\" in white font.\n"
    "\t+ A navigation menu with four items: \"Features\", \"About\", \"Pricing\", "
    "and \"Sign up\". The text is in black font, and the links are aligned to the right.\n"
    "\t+ A search bar on the right side, which is a small oval-shaped input field "
    "with a magnifying glass icon.\n\n"
    "**Hero Section**\n\n"
    "* The hero section is located below the header and takes up most of the page.\n"
    "* It has a white background color (#FFFFFF) with a subtle gradient effect.\n"
    "* The hero section contains the following elements:\n"
    "\t+ A large heading that reads \"Welcome to your all-in-one AI tool\" in bold, "
    "black font (font-size: 36px; font-family: Open Sans).\n"
    "\t+ A subheading that reads \"Check out all the new features in the 13.2 update "
    "in the demo below\" in smaller, gray font (font-size: 18px; font-family: Open Sans).\n"
    "\t+ A call-to-action (CTA) button that reads \"Get Started\" in white font on a "
    "black background (font-size: 18px; font-family: Open Sans).\n"
    "\t+ An image placeholder on the right side, which is a large gray rectangle "
    "with the text \"IMAGE PLACEHOLDER\" in black font.\n\n"
    "**Footer Section**\n\n"
    "* The footer section is located at the bottom of the page and spans the full width.\n"
    "* It has a light gray background color (#F7F7F7) with a subtle shadow effect.\n"
    "* The footer contains the following elements:\n"
    "\t+ A copyright notice that reads \"Used by 100+ companies\" in small, gray font "
    "(font-size: 12px; font-family: Open Sans).\n"
    "\t+ A link to the company's website, which is a small text link that reads "
    "\"Get Started\" in blue font (font-size: 12px; font-family: Open Sans).\n\n"
    "Overall, the design is clean, modern, and easy to navigate. The use of a "
    "consistent color scheme and typography helps to create a cohesive look and "
    "feel throughout the website."
)

_LANDING_PAGE_WITH_COMPONENTS = """import { Button } from "/components/ui/button"

export default function LandingPage() {
  return (
    <div className="min-h-screen bg-gray-100">
      <header className="bg-white shadow-sm">
        <div className="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 py-4 flex items-center justify-between">
          <div className="flex items-center">
            <div className="w-8 h-8 bg-black mr-2"></div>
            <span className="font-bold text-xl">LOGO</span>
          </div>
          <nav className="hidden md:flex space-x-8">
            <a href="#features" className="text-gray-700 hover:text-gray-900">Features</a>
            <a href="#about" className="text-gray-700 hover:text-gray-900">About</a>
            <a href="#pricing" className="text-gray-700 hover:text-gray-900">Pricing</a>
          </nav>
          <Button variant="outline" className="rounded-full">Sign up</Button>
        </div>
      </header>

      <main className="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 py-12">
        <div className="grid grid-cols-1 md:grid-cols-2 gap-12 items-center">
          <div>
            <div className="inline-block px-4 py-2 rounded-full bg-gray-200 text-sm text-gray-700 mb-6">
              Used by 100+ companies
            </div>
            <h1 className="text-4xl md:text-5xl font-bold mb-6">
              Welcome to your all-in-one AI tool
            </h1>
            <p className="text-xl text-gray-600 mb-8">
              Check out all the new features in the 13.2 update in the demo below
            </p>
            <Button className="rounded-full px-8 py-3 bg-black text-white hover:bg-gray-800">
              Get Started
            </Button>
          </div>
          <div className="bg-gray-300 aspect-video rounded-lg flex items-center justify-center">
            <span className="text-gray-600 text-2xl">IMAGE PLACEHOLDER</span>
          </div>
        </div>
      </main>
    </div>
  )
}"""

_LANDING_PAGE_PLAIN = """export default function LandingPage() {
  return (
    <div className="min-h-screen bg-gray-100">
      <header className="bg-white shadow-sm">
        <div className="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 py-4 flex items-center justify-between">
          <div className="flex items-center">
            <div className="w-8 h-8 bg-black mr-2"></div>
            <span className="font-bold text-xl">LOGO</span>
          </div>
          <nav className="hidden md:flex space-x-8">
            <a href="#features" className="text-gray-700 hover:text-gray-900">Features</a>
            <a href="#about" className="text-gray-700 hover:text-gray-900">About</a>
            <a href="#pricing" className="text-gray-700 hover:text-gray-900">Pricing</a>
          </nav>
          <button className="rounded-full border border-gray-300 px-4 py-2 text-sm font-medium hover:bg-gray-50">
            Sign up
          </button>
        </div>
      </header>

      <main className="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 py-12">
        <div className="grid grid-cols-1 md:grid-cols-2 gap-12 items-center">
          <div>
            <div className="inline-block px-4 py-2 rounded-full bg-gray-200 text-sm text-gray-700 mb-6">
              Used by 100+ companies
            </div>
            <h1 className="text-4xl md:text-5xl font-bold mb-6">
              Welcome to your all-in-one AI tool
            </h1>
            <p className="text-xl text-gray-600 mb-8">
              Check out all the new features in the 13.2 update in the demo below
            </p>
            <button className="rounded-full px-8 py-3 bg-black text-white hover:bg-gray-800">
              Get Started
            </button>
          </div>
          <div className="bg-gray-300 aspect-video rounded-lg flex items-center justify-center">
            <span className="text-gray-600 text-2xl">IMAGE PLACEHOLDER</span>
          </div>
        </div>
      </main>
    </div>
  )
}"""

# Examples advertised alongside the component catalog may import from it.
COMPONENT_PROMPT_EXAMPLES = (
    PromptExample(input=_LANDING_PAGE_DESCRIPTION, output=_LANDING_PAGE_WITH_COMPONENTS),
)

PLAIN_PROMPT_EXAMPLES = (
    PromptExample(input=_LANDING_PAGE_DESCRIPTION, output=_LANDING_PAGE_PLAIN),
)


def _render_component(component: ShadcnComponent) -> str:
    return (
        "<component>\n"
        f"<name>\n{component.name}\n</name>\n"
        f"<import-instructions>\n{component.import_docs.strip()}\n</import-instructions>\n"
        f"<usage-instructions>\n{component.usage_docs.strip()}\n</usage-instructions>\n"
        "</component>\n"
    )


def _render_example(example: PromptExample) -> str:
    return (
        "<example>\n"
        f"<input>\n{example.input.strip()}\n</input>\n"
        f"<output>\n{example.output.strip()}\n</output>\n"
        "</example>\n"
    )


def build_coding_prompt(
    shadcn: bool,
    components: Iterable[ShadcnComponent] = SHADCN_COMPONENTS,
    examples: Iterable[PromptExample] | None = None,
) -> str:
    """Build the code-generation instruction text.

    Args:
        shadcn: Whether to advertise the prestyled component catalog.
        components: Catalog to advertise when `shadcn` is true.
        examples: Worked description -> code examples appended last. Defaults to
            `COMPONENT_PROMPT_EXAMPLES` or `PLAIN_PROMPT_EXAMPLES` by `shadcn`.

    Returns:
        Instruction text ending with the examples block.

    Edge cases:
        - `shadcn=False` never mentions any catalog component name, including
          in the default examples.
        - An empty `components` iterable still emits the catalog intro.
    """
    if examples is None:
        examples = COMPONENT_PROMPT_EXAMPLES if shadcn else PLAIN_PROMPT_EXAMPLES

    sections = [CODING_INSTRUCTIONS]

    if shadcn:
        sections.append(COMPONENTS_INTRO + "\n".join(_render_component(c) for c in components))

    sections.append(LIBRARY_RESTRICTION)
    sections.append(EXAMPLES_INTRO + "\n".join(_render_example(e) for e in examples))

    return "\n".join(sections)


def build_code_prompt(description: str, shadcn: bool) -> str:
    """Build the full prompt sent to the code-generation call.

    The description is inserted verbatim between the coding instructions and
    `CODE_ONLY_SUFFIX`.
    """
    return build_coding_prompt(shadcn) + "\n" + description + CODE_ONLY_SUFFIX
