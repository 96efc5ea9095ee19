"""Catalog of prestyled shadcn/ui components offered to the code-generation model.

Each entry carries the component name plus import and usage documentation that
`prompt_builder.build_coding_prompt` interpolates verbatim when the request
enables `shadcn`. Import paths use the absolute `/components/ui/` form expected
by the rendering sandbox.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ShadcnComponent:
    name: str
    import_docs: str
    usage_docs: str


SHADCN_COMPONENTS = (
    ShadcnComponent(
        name="Avatar",
        import_docs='import { Avatar, AvatarFallback, AvatarImage } from "/components/ui/avatar"',
        usage_docs="""
<Avatar>
  <AvatarImage src="https://github.com/nutlope.png" />
  <AvatarFallback>CN</AvatarFallback>
</Avatar>
""",
    ),
    ShadcnComponent(
        name="Badge",
        import_docs='import { Badge } from "/components/ui/badge"',
        usage_docs="""
<Badge>Badge</Badge>
<Badge variant="secondary">Secondary</Badge>
<Badge variant="outline">Outline</Badge>
<Badge variant="destructive">Destructive</Badge>
""",
    ),
    ShadcnComponent(
        name="Button",
        import_docs='import { Button } from "/components/ui/button"',
        usage_docs="""
<Button>A normal button</Button>
<Button variant="secondary">Button</Button>
<Button variant="destructive">Button</Button>
<Button variant="outline">Button</Button>
<Button variant="ghost">Button</Button>
<Button variant="link">Button</Button>
""",
    ),
    ShadcnComponent(
        name="Card",
        import_docs="""
import {
  Card,
  CardContent,
  CardDescription,
  CardFooter,
  CardHeader,
  CardTitle,
} from "/components/ui/card"
""",
        usage_docs="""
<Card>
  <CardHeader>
    <CardTitle>Card Title</CardTitle>
    <CardDescription>Card Description</CardDescription>
  </CardHeader>
  <CardContent>
    <p>Card Content</p>
  </CardContent>
  <CardFooter>
    <p>Card Footer</p>
  </CardFooter>
</Card>
""",
    ),
    ShadcnComponent(
        name="Checkbox",
        import_docs='import { Checkbox } from "/components/ui/checkbox"',
        usage_docs="""
<div className="flex items-center space-x-2">
  <Checkbox id="terms" />
  <label htmlFor="terms" className="text-sm font-medium leading-none">
    Accept terms and conditions
  </label>
</div>
""",
    ),
    ShadcnComponent(
        name="Input",
        import_docs='import { Input } from "/components/ui/input"',
        usage_docs="""
<Input />
<Input type="email" placeholder="Email" />
""",
    ),
    ShadcnComponent(
        name="Label",
        import_docs='import { Label } from "/components/ui/label"',
        usage_docs="""
<Label htmlFor="email">Your email address</Label>
""",
    ),
    ShadcnComponent(
        name="RadioGroup",
        import_docs='import { Label } from "/components/ui/label"\nimport { RadioGroup, RadioGroupItem } from "/components/ui/radio-group"',
        usage_docs="""
<RadioGroup defaultValue="option-one">
  <div className="flex items-center space-x-2">
    <RadioGroupItem value="option-one" id="option-one" />
    <Label htmlFor="option-one">Option One</Label>
  </div>
  <div className="flex items-center space-x-2">
    <RadioGroupItem value="option-two" id="option-two" />
    <Label htmlFor="option-two">Option Two</Label>
  </div>
</RadioGroup>
""",
    ),
    ShadcnComponent(
        name="Select",
        import_docs="""
import {
  Select,
  SelectContent,
  SelectItem,
  SelectTrigger,
  SelectValue,
} from "/components/ui/select"
""",
        usage_docs="""
<Select>
  <SelectTrigger className="w-[180px]">
    <SelectValue placeholder="Theme" />
  </SelectTrigger>
  <SelectContent>
    <SelectItem value="light">Light</SelectItem>
    <SelectItem value="dark">Dark</SelectItem>
    <SelectItem value="system">System</SelectItem>
  </SelectContent>
</Select>
""",
    ),
    ShadcnComponent(
        name="Switch",
        import_docs='import { Switch } from "/components/ui/switch"',
        usage_docs="""
<div className="flex items-center space-x-2">
  <Switch id="airplane-mode" />
  <label htmlFor="airplane-mode">Airplane Mode</label>
</div>
""",
    ),
    ShadcnComponent(
        name="Tabs",
        import_docs='import { Tabs, TabsContent, TabsList, TabsTrigger } from "/components/ui/tabs"',
        usage_docs="""
<Tabs defaultValue="account" className="w-[400px]">
  <TabsList>
    <TabsTrigger value="account">Account</TabsTrigger>
    <TabsTrigger value="password">Password</TabsTrigger>
  </TabsList>
  <TabsContent value="account">Make changes to your account here.</TabsContent>
  <TabsContent value="password">Change your password here.</TabsContent>
</Tabs>
""",
    ),
    ShadcnComponent(
        name="Textarea",
        import_docs='import { Textarea } from "/components/ui/textarea"',
        usage_docs="""
<Textarea placeholder="Type your message here." />
""",
    ),
)


def component_names(components=SHADCN_COMPONENTS) -> list[str]:
    return [component.name for component in components]
